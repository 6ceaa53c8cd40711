# engine/errors.py

class AggregationError(Exception):
    pass


class InvalidOption(AggregationError, ValueError):
    pass


class MalformedRecord(AggregationError, ValueError):
    pass
