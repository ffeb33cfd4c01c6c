import pytest
from myvote.errors import ValidationError
from myvote.security.input_validator import InputValidator


@pytest.fixture
def validator():
    return InputValidator()


def election_payload(**overrides):
    payload = {
        'companyName': 'Acme Board',
        'totalSeats': 2,
        'start_ts': '2025-01-01T00:00:00Z',
        'end_ts': '2025-01-02T00:00:00Z',
        'candidates': [{'name': 'Alice'}, {'name': 'Bob', 'party': 'Blue'}],
    }
    payload.update(overrides)
    return payload


class TestFormats:
    @pytest.mark.parametrize("email,expected", [
        ("user@example.com", True),
        ("first.last+tag@sub.example.org", True),
        ("no-at-sign.example.com", False),
        ("spaces in@example.com", False),
        ("user@nodot", False),
        (None, False),
    ])
    def test_validate_email(self, validator, email, expected):
        assert validator.validate_email(email) is expected

    @pytest.mark.parametrize("phone,expected", [
        ("+91 98765 43210", True),
        ("555-123-4567", True),
        ("1234567", True),
        ("12345", False),
        ("phone123456", False),
        ("+" + "1" * 25, False),
    ])
    def test_validate_phone(self, validator, phone, expected):
        assert validator.validate_phone(phone) is expected

    def test_sanitize_string_strips_markup(self, validator):
        assert validator.sanitize_string("  <b>Alice</b> ") == "Alice"

    def test_sanitize_string_keeps_plain_text_characters(self, validator):
        assert validator.sanitize_string("Tom & Jerry") == "Tom & Jerry"
        assert validator.sanitize_string("x < y") == "x < y"
        assert validator.sanitize_string("\"Quoted\" O'Brien") == "\"Quoted\" O'Brien"
        assert validator.sanitize_string("<i>Law &amp; Order</i>") == "Law & Order"

    def test_sanitize_string_rejects_overlong_text(self, validator):
        assert validator.sanitize_string("a" * 255) == "a" * 255
        with pytest.raises(ValidationError, match="party must be at most 100 characters"):
            validator.sanitize_string("a" * 101, max_length=100, field="party")

    def test_sanitize_string_rejects_non_string(self, validator):
        with pytest.raises(ValidationError):
            validator.sanitize_string(42)


class TestRegistration:
    def test_valid_registration_is_normalized(self, validator):
        data = validator.validate_registration({
            'name': '  Asha  ', 'email': ' asha@example.com ', 'password': 'secret1', 'age': '30',
        })
        assert data['name'] == 'Asha'
        assert data['email'] == 'asha@example.com'
        assert data['phone'] is None
        assert data['age'] == 30

    @pytest.mark.parametrize("payload,message", [
        ({'name': 'A', 'email': 'a@example.com', 'password': 'secret1'}, 'Name'),
        ({'email': 'a@example.com', 'password': 'secret1'}, 'Name'),
        ({'name': 'Asha', 'email': 'a@example.com', 'password': '12345'}, 'Password'),
        ({'name': 'Asha', 'email': 'a@example.com'}, 'Password'),
        ({'name': 'Asha', 'email': ' ', 'phone': '', 'password': 'secret1'}, 'Either email or phone'),
        ({'name': 'Asha', 'email': 'bad-email', 'password': 'secret1'}, 'Invalid email'),
        ({'name': 'Asha', 'phone': 'abc', 'password': 'secret1'}, 'Invalid phone'),
        ({'name': 'Asha', 'phone': '5551234567', 'password': 'secret1', 'age': 'old'}, 'age'),
    ])
    def test_invalid_registration(self, validator, payload, message):
        with pytest.raises(ValidationError) as exc:
            validator.validate_registration(payload)
        assert message in str(exc.value)

    def test_login_requires_both_fields(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_login({'identifier': 'a@example.com'})
        with pytest.raises(ValidationError):
            validator.validate_login({'password': 'secret1'})
        assert validator.validate_login({'identifier': ' a@example.com ', 'password': 'p'}) == ('a@example.com', 'p')


class TestTimestamps:
    def test_epoch_millis_pass_through(self, validator):
        assert validator.parse_timestamp(1735689600000, 'start') == 1735689600000

    def test_iso_strings_normalize_to_millis(self, validator):
        assert validator.parse_timestamp('2025-01-01T00:00:00Z', 'start') == 1735689600000
        assert validator.parse_timestamp('2025-01-01T05:30:00+05:30', 'start') == 1735689600000
        # naive strings are UTC
        assert validator.parse_timestamp('2025-01-01T00:00:00', 'start') == 1735689600000

    @pytest.mark.parametrize("value", ['tomorrow', '', True, None, float('nan'), [2025]])
    def test_unparseable_timestamps(self, validator, value):
        with pytest.raises(ValidationError):
            validator.parse_timestamp(value, 'start')


class TestElection:
    def test_valid_election(self, validator):
        fields = validator.validate_election(election_payload(description='Annual vote'))
        assert fields['company_name'] == 'Acme Board'
        assert fields['total_seats'] == 2
        assert fields['start_ts'] < fields['end_ts']
        assert fields['eligibility'] == 'all'
        assert fields['publish'] is False
        assert fields['description'] == 'Annual vote'
        assert [c['name'] for c in fields['candidates']] == ['Alice', 'Bob']
        assert fields['candidates'][1] == {'name': 'Bob', 'description': '', 'party': 'Blue', 'manifesto': ''}

    def test_title_and_start_end_aliases(self, validator):
        payload = {
            'title': 'Club', 'totalSeats': '1', 'start': 1000, 'end': 2000,
            'candidates': [{'name': 'Solo'}], 'publish': True, 'eligibility': 'members',
        }
        fields = validator.validate_election(payload)
        assert fields['company_name'] == 'Club'
        assert fields['total_seats'] == 1
        assert (fields['start_ts'], fields['end_ts']) == (1000, 2000)
        assert fields['publish'] is True
        assert fields['eligibility'] == 'members'

    @pytest.mark.parametrize("start,end", [
        ('2025-01-02T00:00:00Z', '2025-01-01T00:00:00Z'),
        ('2025-01-01T00:00:00Z', '2025-01-01T00:00:00Z'),
        (2000, 1000),
    ])
    def test_start_must_precede_end(self, validator, start, end):
        with pytest.raises(ValidationError):
            validator.validate_election(election_payload(start_ts=start, end_ts=end))

    def test_seats_upper_bound(self, validator):
        assert validator.validate_election(election_payload(totalSeats=2**31 - 1))["total_seats"] == 2**31 - 1
        with pytest.raises(ValidationError, match="at most"):
            validator.validate_election(election_payload(totalSeats=10**20))

    def test_overlong_candidate_name(self, validator):
        with pytest.raises(ValidationError, match="Candidate #1 name must be at most 100 characters"):
            validator.validate_election(election_payload(candidates=[{"name": "N" * 150}]))

    @pytest.mark.parametrize("seats", [0, -1, 2.5, 'three', True, ''])
    def test_seats_must_be_positive_integer(self, validator, seats):
        with pytest.raises(ValidationError):
            validator.validate_election(election_payload(totalSeats=seats))

    @pytest.mark.parametrize("overrides", [
        {'companyName': '   '},
        {'companyName': None},
        {'candidates': []},
        {'candidates': 'Alice'},
        {'candidates': [{'name': ''}]},
        {'candidates': ['Alice']},
        {'start_ts': None},
        {'end_ts': 'not a date'},
        {'publish': 'yes'},
        {'description': 42},
    ])
    def test_invalid_elections(self, validator, overrides):
        with pytest.raises(ValidationError):
            validator.validate_election(election_payload(**overrides))

    def test_non_object_payload(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_election(['not', 'a', 'dict'])
