"""
Exceptions for pole/zero filter design and processing.
"""

class FilterDesignError(Exception):
    """Raised when filter design fails"""
    pass

class FilterProcessingError(Exception):
    """Raised when filter processing fails"""
    pass

class InvalidFilterSpecificationError(FilterDesignError):
    """Raised when preset parameters are invalid"""
    pass

class FilterInstabilityError(FilterDesignError):
    """Raised when a design has poles on or outside the unit circle"""
    pass

class UnsupportedFilterTypeError(FilterDesignError):
    """Raised when requested filter family is not supported"""
    pass

class UnsupportedFilterOrderError(FilterDesignError):
    """Raised when a family has no design for the requested order"""
    pass

class NonMonicDenominatorError(FilterDesignError):
    """Raised when denominator coefficients do not start with 1"""
    pass

class RootNotFoundError(KeyError):
    """Raised when a root handle is not present in an arena"""
    pass
