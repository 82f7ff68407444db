"""
Enumeration types used across the engine.
"""

from enum import Enum


class FieldType(str, Enum):
    """Collection field types"""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"
    RICH_TEXT = "rich_text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    REFERENCE = "reference"
    MULTI_REFERENCE = "multi_reference"

    @classmethod
    def _missing_(cls, value: object) -> "FieldType | None":
        # Stored data uses both "multi-reference" and "multi_reference"
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def is_reference(self) -> bool:
        return self in (FieldType.REFERENCE, FieldType.MULTI_REFERENCE)

    @property
    def is_asset(self) -> bool:
        return self in (FieldType.IMAGE, FieldType.AUDIO, FieldType.VIDEO, FieldType.DOCUMENT)


class ConditionSource(str, Enum):
    """What a visibility condition tests"""
    COLLECTION_FIELD = "collection_field"
    PAGE_COLLECTION = "page_collection"


class VisibilityOperator(str, Enum):
    """Comparators available to visibility conditions and collection filters"""
    # Text / generic
    IS = "is"
    IS_NOT = "is_not"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "does_not_contain"
    IS_PRESENT = "is_present"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    # Number
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    # Date
    IS_BEFORE = "is_before"
    IS_AFTER = "is_after"
    IS_BETWEEN = "is_between"
    # Reference
    IS_ONE_OF = "is_one_of"
    IS_NOT_ONE_OF = "is_not_one_of"
    EXISTS = "exists"
    DOES_NOT_EXIST = "does_not_exist"
    # Multi-reference / page collection
    CONTAINS_ALL_OF = "contains_all_of"
    CONTAINS_EXACTLY = "contains_exactly"
    ITEM_COUNT = "item_count"
    HAS_ITEMS = "has_items"
    HAS_NO_ITEMS = "has_no_items"


class CompareOperator(str, Enum):
    """Numeric comparators for item counts"""
    EQ = "eq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
