# myvote/security/input_validator.py

import re
import html
import math
import bleach
from datetime import datetime, timezone

from myvote.encryption.password_hashing import MIN_PASSWORD_LENGTH
from myvote.errors import ValidationError

# Request-schema validation: every payload is checked for presence, type and
# format before any mutation begins. Free text is stripped of markup.

MIN_NAME_LENGTH = 2
MAX_EPOCH_MILLIS = 253402300799999  # 9999-12-31T23:59:59.999Z
MAX_INT_COLUMN = 2**31 - 1


class InputValidator:
    def __init__(self):
        self.allowed_html_tags = []
        self.allowed_html_attributes = {}

        self.patterns = {
            'email': re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$'),
            'phone': re.compile(r'^[+\d][\d\s\-]{6,20}$'),
        }

    def sanitize_string(self, input_str, max_length=255, field="Input"):
        # Tags are stripped; the text itself is stored unescaped and escaped on render.
        if not isinstance(input_str, str):
            raise ValidationError(f"{field} must be a string")
        input_str = input_str.strip()
        if len(input_str) > max_length:
            raise ValidationError(f"{field} must be at most {max_length} characters")
        sanitized = bleach.clean(input_str, tags=self.allowed_html_tags, attributes=self.allowed_html_attributes, strip=True)
        return html.unescape(sanitized).strip()

    def validate_email(self, email):
        return isinstance(email, str) and bool(self.patterns['email'].match(email))

    def validate_phone(self, phone):
        return isinstance(phone, str) and bool(self.patterns['phone'].match(phone))

    def _optional_text(self, data, key, default='', max_length=255):
        value = data.get(key)
        if value is None:
            return default
        if not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        return self.sanitize_string(value, max_length=max_length, field=key)

    @staticmethod
    def _blank(value):
        return value is None or (isinstance(value, str) and not value.strip())

    def validate_registration(self, data):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        name = data.get('name')
        if not isinstance(name, str) or len(name.strip()) < MIN_NAME_LENGTH:
            raise ValidationError("Name is required and must be at least 2 characters.")

        password = data.get('password')
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password is required and must be at least 6 characters.")

        email, phone = data.get('email'), data.get('phone')
        if self._blank(email) and self._blank(phone):
            raise ValidationError("Either email or phone is required.")
        if not self._blank(email):
            if not isinstance(email, str) or not self.validate_email(email.strip()):
                raise ValidationError("Invalid email format.")
            email = email.strip()
        else:
            email = None
        if not self._blank(phone):
            if not isinstance(phone, str) or not self.validate_phone(phone.strip()):
                raise ValidationError("Invalid phone format.")
            phone = phone.strip()
        else:
            phone = None

        age = data.get('age')
        if self._blank(age):
            age = None
        else:
            try:
                age = self.parse_non_negative_int(age)
            except ValueError:
                raise ValidationError("age must be a non-negative integer")
            if age > MAX_INT_COLUMN:
                raise ValidationError("age is out of range")

        aadhar = data.get('aadhar')
        aadhar = None if self._blank(aadhar) else self.sanitize_string(str(aadhar), max_length=32, field="aadhar")

        gender = data.get('gender')
        gender = None if self._blank(gender) else self._optional_text(data, 'gender', max_length=32)

        cleaned_name = self.sanitize_string(name, max_length=100, field="name")
        if len(cleaned_name) < MIN_NAME_LENGTH:
            raise ValidationError("Name is required and must be at least 2 characters.")

        return {
            'name': cleaned_name,
            'email': email,
            'phone': phone,
            'password': password,
            'age': age,
            'aadhar': aadhar,
            'gender': gender,
        }

    def validate_login(self, data):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        identifier, password = data.get('identifier'), data.get('password')
        if not isinstance(identifier, str) or not identifier.strip() or not isinstance(password, str) or not password:
            raise ValidationError("identifier and password are required")
        return identifier.strip(), password

    @staticmethod
    def parse_non_negative_int(value):
        if isinstance(value, bool):
            raise ValueError("booleans are not integers")
        if isinstance(value, int):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())
        else:
            raise ValueError(f"not an integer: {value!r}")
        if number < 0:
            raise ValueError(f"negative: {number}")
        return number

    def parse_seats(self, value):
        try:
            seats = self.parse_non_negative_int(value)
        except ValueError:
            raise ValidationError("totalSeats must be a positive integer")
        if seats <= 0:
            raise ValidationError("totalSeats must be a positive integer")
        if seats > MAX_INT_COLUMN:
            raise ValidationError(f"totalSeats must be at most {MAX_INT_COLUMN}")
        return seats

    def parse_timestamp(self, value, field):
        """Normalize epoch milliseconds or an ISO-8601 string to epoch milliseconds.

        Naive date/time strings are taken as UTC. Booleans, blank strings,
        non-finite numbers and unparseable strings are rejected.
        """
        if isinstance(value, bool):
            raise ValidationError(f"Invalid {field} timestamp")
        if isinstance(value, (int, float)):
            if not math.isfinite(value) or abs(value) > MAX_EPOCH_MILLIS:
                raise ValidationError(f"Invalid {field} timestamp")
            return int(value)
        if isinstance(value, str) and value.strip():
            text = value.strip()
            if text[-1] in 'Zz':
                text = text[:-1] + '+00:00'
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise ValidationError(f"Invalid {field} timestamp")
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return int(parsed.timestamp() * 1000)
        raise ValidationError(f"Invalid {field} timestamp")

    def validate_candidate(self, candidate, index):
        if not isinstance(candidate, dict):
            raise ValidationError(f"Candidate #{index + 1} must be an object")
        name = candidate.get('name')
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Candidate #{index + 1} requires a name")
        cleaned_name = self.sanitize_string(name, max_length=100, field=f"Candidate #{index + 1} name")
        if not cleaned_name:
            raise ValidationError(f"Candidate #{index + 1} requires a name")
        return {
            'name': cleaned_name,
            'description': self._optional_text(candidate, 'description', max_length=5000),
            'party': self._optional_text(candidate, 'party', max_length=100),
            'manifesto': self._optional_text(candidate, 'manifesto', max_length=5000),
        }

    def validate_election(self, data):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        company_name = data.get('companyName', data.get('title'))
        seats = data.get('totalSeats')
        start = data.get('start_ts', data.get('start'))
        end = data.get('end_ts', data.get('end'))
        candidates = data.get('candidates')

        if (self._blank(company_name) or seats is None or self._blank(start) or self._blank(end)
                or not isinstance(candidates, list) or not candidates):
            raise ValidationError(
                "companyName, totalSeats, start_ts, end_ts and at least one candidate are required"
            )
        if not isinstance(company_name, str):
            raise ValidationError("companyName must be a string")
        company_name = self.sanitize_string(company_name, max_length=200, field="companyName")
        if not company_name:
            raise ValidationError("companyName must not be empty")

        start_ts = self.parse_timestamp(start, 'start')
        end_ts = self.parse_timestamp(end, 'end')
        if start_ts >= end_ts:
            raise ValidationError("Invalid start/end timestamps: start must be before end")

        total_seats = self.parse_seats(seats)

        publish = data.get('publish', False)
        if not isinstance(publish, bool):
            raise ValidationError("publish must be a boolean")

        eligibility = self._optional_text(data, 'eligibility', default='all', max_length=100) or 'all'

        return {
            'company_name': company_name,
            'description': self._optional_text(data, 'description', max_length=5000),
            'total_seats': total_seats,
            'start_ts': start_ts,
            'end_ts': end_ts,
            'eligibility': eligibility,
            'publish': publish,
            'candidates': [self.validate_candidate(c, i) for i, c in enumerate(candidates)],
        }
