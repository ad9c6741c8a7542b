"""Employee login IDs.

Format: ``[CompanyCode][First2][Last2][Year][Serial]``, e.g. ``OIJODO20230001``
is John Doe at company ``OI`` who joined in 2023 as the first hire of
that year. The serial is four digits and widens to five past 9999.
"""
import logging
import re
import secrets

from django.conf import settings
from django.db import transaction
from django.utils.crypto import get_random_string

from dayflow_hrms.users.models import LoginIdSequence

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_CODE = "COMP"
PASSWORD_CHAR_CLASSES = (
    "ABCDEFGHJKLMNPQRSTUVWXYZ",
    "abcdefghjkmnpqrstuvwxyz",
    "23456789",
    "@#$%&*!?",
)
TEMPORARY_PASSWORD_CHARS = "".join(PASSWORD_CHAR_CLASSES)


def extract_letters(name, count=2):
    letters = re.sub(r"[^A-Za-z]", "", name or "").upper()
    if not letters:
        return "X" * count
    return letters[:count].ljust(count, "X")


def format_company_code(code):
    cleaned = re.sub(r"[^A-Za-z0-9]", "", code or "").upper()[:4]
    return cleaned or DEFAULT_COMPANY_CODE


def format_serial(serial):
    if serial > 9999:
        return str(serial).zfill(5)
    return str(serial).zfill(4)


class DatabaseSerialStore:
    """Serial counter persisted in ``LoginIdSequence``, one row per (company, year)."""

    def next_serial(self, company_code, year):
        with transaction.atomic():
            sequence, _ = LoginIdSequence.objects.select_for_update().get_or_create(
                company_code=company_code, year=year
            )
            sequence.last_serial += 1
            sequence.save(update_fields=["last_serial", "updated_at"])
            return sequence.last_serial


class InMemorySerialStore:
    def __init__(self):
        self._serials = {}

    def next_serial(self, company_code, year):
        key = (company_code, year)
        self._serials[key] = self._serials.get(key, 0) + 1
        return self._serials[key]


def generate_login_id(first_name, last_name, join_year, company_code=None, store=None):
    code = format_company_code(company_code if company_code is not None else settings.HRMS_COMPANY_CODE)
    store = store or DatabaseSerialStore()
    serial = store.next_serial(code, join_year)
    login_id = f"{code}{extract_letters(first_name)}{extract_letters(last_name)}{join_year}{format_serial(serial)}"
    logger.debug(f"Generated login id {login_id}")
    return login_id


def generate_temporary_password(length=12):
    """Random password with at least one character from each class."""
    chars = [secrets.choice(char_class) for char_class in PASSWORD_CHAR_CLASSES]
    chars += get_random_string(length - len(chars), TEMPORARY_PASSWORD_CHARS)
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def parse_login_id(login_id):
    """Split a login ID back into its parts, or return ``None`` if it is too short.

    Year and serial are read from the end. Five-digit serials are not
    recoverable this way, their first digit lands in the year.
    """
    if not login_id or len(login_id) < 14:
        return None

    serial, year, remaining = login_id[-4:], login_id[-8:-4], login_id[:-8]
    if len(remaining) < 4 or not serial.isdigit() or not year.isdigit():
        return None

    return {
        "company_code": remaining[:-4],
        "first_name_initials": remaining[-4:-2],
        "last_name_initials": remaining[-2:],
        "year": int(year),
        "serial": int(serial),
    }


def is_valid_login_id_format(login_id):
    if not login_id or len(login_id) < 14:
        return False
    return re.fullmatch(r"[A-Z]{4,}\d{8,}", login_id) is not None
