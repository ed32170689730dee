"""DataKnobs Schema Package

Declarative, composable validation of untyped Python data:
- Leaf validators for types (with coercion), predicates, set membership,
  regular expressions and conversions
- Combinators for sequential (AND) and alternative (OR) composition,
  keyed mappings and homogeneous lists
- A single error type carrying nested causes

Example:
    ```python
    from dataknobs_schema import DictSchema, Optional, Predicate, Type

    person = DictSchema({
        "name": Type(str),
        "age": Type(int) & Predicate(lambda age: 18 <= age <= 99),
        Optional("nickname"): Type(str),
    })

    person.validate({"name": "Sue", "age": "28"})
    # {'name': 'Sue', 'age': 28}
    ```
"""

from .base import Validator
from .builders import schema
from .coercion import Coercer
from .combinators import And, ListOf, Or
from .dict_schema import DictSchema
from .exceptions import (
    AlternativeError,
    CoercionError,
    ConfigurationError,
    EmptyResultError,
    ForbiddenKeyError,
    KeyValidationError,
    MembershipError,
    MissingKeyError,
    PatternCompileError,
    PatternMismatchError,
    PredicateError,
    SchemaError,
    StageError,
    TransformError,
    TypeMismatchError,
    UnexpectedKeysError,
)
from .keys import Forbidden, Key, Optional, Required
from .kinds import ValueKind, kind_of
from .result import ValidationResult
from .settings import (
    SchemaSettings,
    configure,
    get_settings,
    reset_settings,
    settings_scope,
)
from .validators import Always, Guard, Membership, Pattern, Predicate, Transform, Type

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Validator",
    "ValidationResult",
    "ValueKind",
    "kind_of",
    # Leaf validators
    "Type",
    "Predicate",
    "Membership",
    "Pattern",
    "Transform",
    "Guard",
    "Always",
    # Combinators
    "And",
    "Or",
    "ListOf",
    "DictSchema",
    "Key",
    "Required",
    "Optional",
    "Forbidden",
    # Builders
    "schema",
    # Coercion
    "Coercer",
    # Errors
    "SchemaError",
    "TypeMismatchError",
    "CoercionError",
    "PredicateError",
    "PatternMismatchError",
    "PatternCompileError",
    "MembershipError",
    "MissingKeyError",
    "UnexpectedKeysError",
    "ForbiddenKeyError",
    "KeyValidationError",
    "StageError",
    "AlternativeError",
    "TransformError",
    "EmptyResultError",
    "ConfigurationError",
    # Settings
    "SchemaSettings",
    "configure",
    "get_settings",
    "reset_settings",
    "settings_scope",
]
