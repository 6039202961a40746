"""
Service layer enums
These enums are used by services and routes without importing database models
"""

from enum import Enum


class TargetField(str, Enum):
    """Member fields a CSV column can be mapped onto"""
    NAME = 'name'
    LAST_NAME = 'last_name'
    EMAIL = 'email'
    PHONE = 'phone'
    HOME_PHONE = 'home_phone'
    MEMBERSHIP_TYPE = 'membership_type'
    STATUS = 'status'
    JOIN_DATE = 'join_date'
    LAST_VISIT = 'last_visit'
    CLIENT_ID = 'client_id'
    NOTES = 'notes'
    ADDRESS = 'address'
    CITY = 'city'
    STATE = 'state'
    ZIP = 'zip'
    BIRTHDAY = 'birthday'
    GENDER = 'gender'
    SOURCE = 'source'
    ACCOUNT_BALANCE = 'account_balance'
    PAYMENT_AMOUNT = 'payment_amount'
    PAYMENT_SCHEDULE = 'payment_schedule'


class RowOutcome(str, Enum):
    """Terminal state of one row in an import run"""
    CREATED = 'created'
    SKIPPED = 'skipped'
    FAILED = 'failed'
