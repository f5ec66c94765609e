class ValidationError(ValueError):
    """Custom exception for printer configuration errors."""

    pass


class FontError(RuntimeError):
    """Custom exception for font loading and selection failures."""

    pass


class RenderingError(RuntimeError):
    """Custom exception for page rasterization and output failures."""

    pass
