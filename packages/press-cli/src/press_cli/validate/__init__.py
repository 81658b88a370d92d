from .validate import parse_extra_options, validate

__all__ = ["parse_extra_options", "validate"]
