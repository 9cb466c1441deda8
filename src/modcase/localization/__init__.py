from modcase.localization.translator import Translator

__all__ = ["Translator"]
