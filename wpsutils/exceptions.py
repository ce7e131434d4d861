class WpsUtilsError(Exception):
    pass


class InvalidWord(WpsUtilsError, ValueError):
    pass


class NegativeCount(WpsUtilsError, ValueError):
    pass


class EmptyInput(WpsUtilsError, ValueError):
    pass
