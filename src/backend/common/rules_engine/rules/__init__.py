from .bag_info import (
    BagInfoContainsAtMostOneOf,
    BagInfoContainsExactlyOneOf,
    BagInfoCreatedElementIsIso8601Date,
    BagInfoExistsAndIsWellformed,
    BagInfoIsVersionOfIsValidUrnUuid,
    OrganizationalIdentifierPrefixIsValid,
)
from .manifests import BagIsValid, ContainsNotJustMD5Manifest
from .structure import (
    ContainsDir,
    ContainsFile,
    ContainsNothingElseThan,
    MustNotContain,
    OptionalFileIsUtf8Decodable,
)

__all__ = [
    "BagIsValid",
    "BagInfoExistsAndIsWellformed",
    "BagInfoContainsExactlyOneOf",
    "BagInfoContainsAtMostOneOf",
    "BagInfoCreatedElementIsIso8601Date",
    "BagInfoIsVersionOfIsValidUrnUuid",
    "OrganizationalIdentifierPrefixIsValid",
    "ContainsNotJustMD5Manifest",
    "ContainsDir",
    "ContainsFile",
    "ContainsNothingElseThan",
    "MustNotContain",
    "OptionalFileIsUtf8Decodable",
]
