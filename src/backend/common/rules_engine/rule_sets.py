"""Built-in rule sets for the DANS BagIt profile."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .models import DepositType, ValidationLevel
from .registry import RuleServices, register_rule_set
from .rule import NumberedRule
from .rules import (
    BagInfoContainsAtMostOneOf,
    BagInfoContainsExactlyOneOf,
    BagInfoCreatedElementIsIso8601Date,
    BagInfoExistsAndIsWellformed,
    BagInfoIsVersionOfIsValidUrnUuid,
    BagIsValid,
    ContainsDir,
    ContainsFile,
    ContainsNothingElseThan,
    ContainsNotJustMD5Manifest,
    MustNotContain,
    OptionalFileIsUtf8Decodable,
    OrganizationalIdentifierPrefixIsValid,
)

METADATA_PATH = Path("metadata")
PAYLOAD_PATH = Path("data")

MIGRATION_METADATA_FILES = (
    "dataset.xml",
    "files.xml",
    "provenance.xml",
    "amd.xml",
    "emd.xml",
    "original",
    "original/dataset.xml",
    "original/files.xml",
    "depositor-info",
    "depositor-info/agreements.xml",
    "depositor-info/depositor-agreement.pdf",
    "depositor-info/depositor-agreement.txt",
    "depositor-info/message-from-depositor.txt",
    "license.html",
    "license.txt",
    "license.pdf",
)


def common_rules(services: RuleServices) -> List[NumberedRule]:
    fs = services.file_service
    reader = services.reader
    return [
        # 1.1 validity
        NumberedRule("1.1.1", BagIsValid(reader, fs)),
        # 1.2 bag-info.txt
        NumberedRule("1.2.1", BagInfoExistsAndIsWellformed(reader, fs)),
        NumberedRule("1.2.2(a)", BagInfoContainsExactlyOneOf("Created", reader), ("1.2.1",)),
        NumberedRule("1.2.2(b)", BagInfoCreatedElementIsIso8601Date(reader), ("1.2.2(a)",)),
        NumberedRule("1.2.3(a)", BagInfoContainsAtMostOneOf("Is-Version-Of", reader), ("1.2.1",)),
        NumberedRule("1.2.3(b)", BagInfoIsVersionOfIsValidUrnUuid(reader), ("1.2.3(a)",)),
        NumberedRule("1.2.4(a)", BagInfoContainsAtMostOneOf("Has-Organizational-Identifier", reader), ("1.2.1",)),
        NumberedRule(
            "1.2.4(b)",
            BagInfoContainsAtMostOneOf("Has-Organizational-Identifier-Version", reader),
            ("1.2.4(a)",),
        ),
        NumberedRule(
            "1.2.4(c)",
            OrganizationalIdentifierPrefixIsValid(reader, services.organizational_identifier_prefixes),
            ("1.2.4(a)",),
            deposit_type=DepositType.DEPOSIT,
        ),
        # 1.3 manifests
        NumberedRule("1.3.1", ContainsNotJustMD5Manifest(reader), ("1.1.1",)),
        # 2 structure
        NumberedRule("2.1", ContainsDir(METADATA_PATH, fs), ("1.1.1",)),
        NumberedRule("2.2(a)", ContainsFile(METADATA_PATH / "dataset.xml", fs), ("2.1",)),
        NumberedRule("2.2(b)", ContainsFile(METADATA_PATH / "files.xml", fs), ("2.1",)),
        NumberedRule(
            "2.2-MIGRATION",
            ContainsNothingElseThan(METADATA_PATH, MIGRATION_METADATA_FILES, fs),
            ("2.1",),
            deposit_type=DepositType.MIGRATION,
        ),
        NumberedRule(
            "2.3",
            ContainsNothingElseThan(METADATA_PATH, ("dataset.xml", "files.xml"), fs),
            ("2.1",),
            deposit_type=DepositType.DEPOSIT,
        ),
        # 3.3 original-filepaths.txt
        NumberedRule("3.3.1", OptionalFileIsUtf8Decodable(Path("original-filepaths.txt"), fs), ("1.1.1",)),
    ]


@register_rule_set("datastation")
def datastation_rules(services: RuleServices) -> List[NumberedRule]:
    return common_rules(services) + [
        NumberedRule(
            "4.4",
            MustNotContain(PAYLOAD_PATH, ("original-metadata.zip",), services.file_service),
            ("1.1.1",),
            deposit_type=DepositType.DEPOSIT,
            level=ValidationLevel.WITH_DATA_STATION_CONTEXT,
        ),
    ]


@register_rule_set("vaas")
def vaas_rules(services: RuleServices) -> List[NumberedRule]:
    return common_rules(services)
