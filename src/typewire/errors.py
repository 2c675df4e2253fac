__all__ = ["DependencyError", "InterfaceError"]


class DependencyError(Exception):
    """Raised when a field or parameter type cannot be resolved or assigned."""

    pass


class InterfaceError(TypeError):
    """Raised when a value passed as an interface marker does not denote an interface."""

    pass
