from .requirements_txt import RequirementsTxt

__all__ = ["RequirementsTxt"]
