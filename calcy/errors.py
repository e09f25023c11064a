

class CalcyError(Exception):
    """ Base class for all calcy errors"""
    pass

class CalcySyntaxError(CalcyError):
    """ Raised by the reader on a malformed token stream"""

class CalcyArityError(CalcyError):
    """ Raised when the number of arguments passed to a form or function is incorrect"""

class CalcyTypeError(CalcyError):
    """ Raised when an argument does not have the kind a signature declares"""

class CalcyRuntimeError(CalcyError):
    """ Raised when evaluation cannot proceed"""

class CalcyUnboundSymbol(CalcyRuntimeError):
    """ Raised when a symbol is used before it is bound"""

class CalcyRedefinitionError(CalcyRuntimeError):
    """ Raised when a bound name or a reserved keyword is bound again"""

class CalcyRecursionLimitExceeded(CalcyError):
    """ Raised when evaluation nests deeper than the configured maximum depth"""

    def __init__(self, max_depth: int):
        super().__init__(f"Maximum evaluation depth of {max_depth} exceeded")
        self.max_depth = max_depth

class CalcyConfigError(CalcyError):
    """ Raised when a configuration value cannot be understood"""
