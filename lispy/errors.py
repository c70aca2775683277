
class LispyError(Exception):
    """ Base class for all host-level Lispy errors"""
    pass

class LispySyntaxError(LispyError):
    """ Raised when source text is rejected by the parser"""
    pass

class LispyConfigError(LispyError):
    """ Raised when a configuration value cannot be used"""
