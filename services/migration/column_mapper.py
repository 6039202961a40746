"""
Column auto-detection for studio export CSVs.

Every binding comes from one regex in an ordered rule table, so a reviewer
can always tell why a header landed on a field. The proposed mapping is
advisory: the dashboard lets staff repoint or drop columns before import.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Pattern, Sequence, Tuple

from services.enums import TargetField
from services.migration.models import ColumnMapping


@dataclass(frozen=True)
class ColumnRule:
    """Patterns that bind a header to one target field"""
    target: TargetField
    patterns: Tuple[Pattern, ...]
    required: bool = False

    def matches(self, header: str) -> bool:
        return any(pattern.search(header) for pattern in self.patterns)


def rule(target: TargetField, *patterns: str, required: bool = False) -> ColumnRule:
    """Compile case-insensitive patterns into a ColumnRule."""
    return ColumnRule(
        target=target,
        patterns=tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns),
        required=required,
    )


# Table order matters: earlier targets claim headers first.
DEFAULT_COLUMN_RULES: Tuple[ColumnRule, ...] = (
    rule(TargetField.NAME,
         r'^first\s*name$', r'^full\s*name$', r'^name$',
         r'^client\s*name$', r'^member\s*name$', r'^customer\s*name$',
         required=True),
    rule(TargetField.LAST_NAME,
         r'^last\s*name$', r'^surname$', r'^family\s*name$'),
    rule(TargetField.EMAIL,
         r'^e?-?mail$', r'^email[_\s]*address$', r'^e-?mail[_\s]*address$',
         required=True),
    rule(TargetField.PHONE,
         r'^phone([_\s]*number)?$', r'^mobile([_\s]*phone)?$',
         r'^cell([_\s]*phone)?$', r'^tel(ephone)?$'),
    rule(TargetField.HOME_PHONE,
         r'^home[_\s]*phone$'),
    rule(TargetField.MEMBERSHIP_TYPE,
         r'^membership\s*type$', r'^plan$', r'^subscription$', r'^membership$',
         r'^package$', r'^active\s*memberships?$', r'^pricing\s*option$'),
    rule(TargetField.STATUS,
         r'^status$', r'^active$', r'^member\s*status$', r'^client\s*status$'),
    rule(TargetField.JOIN_DATE,
         r'^date\s*added$', r'^member\s*since$', r'^customer\s*since$',
         r'^creation\s*date$', r'^join(ed)?\s*date$', r'^sign[_\s]*up\s*date$'),
    rule(TargetField.LAST_VISIT,
         r'^last\s*visit$', r'^last\s*appointment$', r'^last\s*class$',
         r'^last\s*check[_\s-]*in$'),
    rule(TargetField.CLIENT_ID,
         r'^(client\s*)?id$', r'^member\s*id$', r'^barcode\s*id$', r'^customer\s*id$'),
    rule(TargetField.NOTES,
         r'^notes?$', r'^comments?$'),
    rule(TargetField.ADDRESS,
         r'^address$', r'^street\s*address$'),
    rule(TargetField.CITY,
         r'^city$', r'^town$'),
    rule(TargetField.STATE,
         r'^state$', r'^province$', r'^region$'),
    rule(TargetField.ZIP,
         r'^zip$', r'^zip\s*code$', r'^postal\s*code$', r'^postcode$'),
    rule(TargetField.BIRTHDAY,
         r'^birthday$', r'^birth\s*date$', r'^date\s*of\s*birth$', r'^dob$'),
    rule(TargetField.GENDER,
         r'^gender$', r'^sex$'),
    rule(TargetField.SOURCE,
         r'^source$', r'^referral\s*source$', r'^how\s*did\s*(you|they)\s*(hear|find)'),
    rule(TargetField.ACCOUNT_BALANCE,
         r'^account\s*balance$', r'^balance$'),
    rule(TargetField.PAYMENT_AMOUNT,
         r'^payment\s*amount$', r'^auto[_\s-]*pay\s*amount$'),
    rule(TargetField.PAYMENT_SCHEDULE,
         r'^auto[_\s-]*pay\s*schedule$', r'^billing\s*schedule$', r'^payment\s*schedule$'),
)


@dataclass(frozen=True)
class ColumnMapperConfig:
    """Immutable rule table handed to a ColumnMapper"""
    rules: Tuple[ColumnRule, ...] = DEFAULT_COLUMN_RULES

    @classmethod
    def from_rules(cls, rules: Iterable[ColumnRule]) -> 'ColumnMapperConfig':
        return cls(rules=tuple(rules))


class ColumnMapper:
    """Proposes a column mapping for a set of CSV headers"""

    def __init__(self, config: ColumnMapperConfig = None):
        self.config = config or ColumnMapperConfig()

    def auto_detect(self, headers: Sequence[str]) -> List[ColumnMapping]:
        """
        Bind headers to target fields, greedy and first-match-wins.

        For each rule in table order the first unused header (in header
        order) matching any of its patterns is bound. A header is bound at
        most once and so is a target; unmatched headers are left out.

        Args:
            headers: CSV header names in column order

        Returns:
            Proposed mappings in rule-table order
        """
        columns = []
        used_headers = set()

        for column_rule in self.config.rules:
            for header in headers:
                if header in used_headers:
                    continue
                if column_rule.matches(header):
                    columns.append(ColumnMapping(
                        source=header,
                        target=column_rule.target,
                        required=column_rule.required,
                    ))
                    used_headers.add(header)
                    break

        return columns
