from less_toolkit.models.options import LessOptions, load_options

__all__ = ["LessOptions", "load_options"]
