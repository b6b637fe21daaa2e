"""
Base class for Value Objects.

Value Objects are immutable and compared by their attributes, never by
identity. Subclasses are frozen dataclasses that validate themselves in
``__post_init__``.

Example:
    @dataclass(frozen=True)
    class Isbn(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if len(self.value) > 20:
                raise ValidationError("ISBN is too long", field="isbn")
"""


class ValueObject:
    """Base class for Value Objects in the domain model."""
