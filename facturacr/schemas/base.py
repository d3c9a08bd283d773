"""
Base model shared by documents and their sub-entities.

A record is a pydantic model carrying a declarative rule table and an XML
tag. Construction only checks shape (types, digits, mappings); business
rules are evaluated on demand by the validation engine, and every XML
fragment is emitted only after the record, including everything it owns,
validates.
"""
from typing import ClassVar, Iterator, Optional, Tuple, Type
from xml.etree.ElementTree import Element, SubElement, tostring

from pydantic import BaseModel, ConfigDict

from facturacr.core.exceptions import ValidationError
from facturacr.utils import validators
from facturacr.utils.validators import RuleTable, ValidationResult


class Record(BaseModel):
    """Validated record producing one serialization fragment."""

    RULES: ClassVar[RuleTable] = {}
    XML_TAG: ClassVar[str] = ""
    ERROR_CLASS: ClassVar[Type[ValidationError]] = ValidationError
    ERROR_MESSAGE: ClassVar[str] = "Invalid record"

    model_config = ConfigDict(coerce_numbers_to_str=True, validate_assignment=True)

    def validate(self) -> ValidationResult:  # type: ignore[override]
        return validators.validate(self)

    def children(self) -> Iterator[Tuple[str, "Record"]]:
        """Owned records, paired with the path used to report their violations."""
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Record):
                yield name, value
            elif isinstance(value, list):
                for index, entry in enumerate(value):
                    if isinstance(entry, Record):
                        yield f"{name}[{index}]", entry

    def ensure_valid(self) -> ValidationResult:
        return validators.ensure_valid(self, self.ERROR_MESSAGE, self.ERROR_CLASS)

    def build_xml(self, parent: Optional[Element] = None) -> Element:
        """
        Validate, then emit this record's fragment.

        Args:
            parent: Element to append to; a detached element is created when None

        Raises:
            ValidationError: If the record or anything it owns is invalid
        """
        self.ensure_valid()
        element = self.create_element(parent)
        self.fill_xml(element)
        return element

    def create_element(self, parent: Optional[Element]) -> Element:
        if parent is None:
            return Element(self.XML_TAG)
        return SubElement(parent, self.XML_TAG)

    def fill_xml(self, element: Element) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement fill_xml")

    def to_xml(self) -> str:
        return tostring(self.build_xml(), encoding="unicode")
