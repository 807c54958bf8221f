"""Exceptions raised when a genotype string cannot be parsed."""


class FlowerCrossError(ValueError):
    """Base class for flowercross errors."""


class InvalidFormatError(FlowerCrossError):
    """Genotype text is not exactly as long as the allele layout."""

    def __init__(self, text: str, expected_length: int):
        self.text = text
        self.expected_length = expected_length
        super().__init__(
            f"Genotype string must be {expected_length} characters long, "
            f"got {len(text)}: {text!r}"
        )


class InvalidCharacterError(FlowerCrossError):
    """A character is neither case of the allele letter for its position."""

    def __init__(self, text: str, position: int, expected: str):
        self.text = text
        self.position = position
        self.char = text[position]
        self.expected = expected
        super().__init__(
            f"Invalid allele {self.char!r} at position {position} of {text!r}; "
            f"expected {expected!r} or {expected.lower()!r}"
        )
