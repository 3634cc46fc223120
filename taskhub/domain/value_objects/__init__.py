"""Value objects for TaskHub queries and authorization."""

from taskhub.domain.value_objects.auth_scope import (
    AuthScope,
    OwnedOrAssigned,
    Unrestricted,
    scope_for,
)
from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    FieldContains,
    FieldEquals,
    FieldIn,
    FilterExpression,
    MatchAll,
    SortSpec,
    conjoin,
)

__all__: list[str] = [
    "MATCH_ALL",
    "AllOf",
    "AnyOf",
    "AuthScope",
    "FieldContains",
    "FieldEquals",
    "FieldIn",
    "FilterExpression",
    "MatchAll",
    "OwnedOrAssigned",
    "SortSpec",
    "Unrestricted",
    "conjoin",
    "scope_for",
]
