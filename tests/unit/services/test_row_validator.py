"""
Tests for row validation and import preview
"""

import pytest

from services.enums import TargetField
from services.migration.csv_parser import parse_csv
from services.migration.models import ColumnMapping, freeze_row
from services.migration.row_validator import generate_preview, validate_row

COLUMNS = [
    ColumnMapping('Name', TargetField.NAME, required=True),
    ColumnMapping('Email', TargetField.EMAIL, required=True),
    ColumnMapping('Phone', TargetField.PHONE),
]


def make_row(**values):
    row = {'Name': '', 'Email': '', 'Phone': ''}
    row.update(values)
    return freeze_row(row)


class TestValidateRow:
    """Per-row checks"""

    def test_valid_row(self):
        validated = validate_row(make_row(Name='John', Email='john@example.com', Phone='+1234567890'), COLUMNS)

        assert validated.valid is True
        assert validated.errors == ()

    def test_missing_required_fields(self):
        validated = validate_row(make_row(Phone='+1234567890'), COLUMNS)

        assert validated.valid is False
        assert 'name is required' in validated.errors
        assert 'email is required' in validated.errors

    def test_whitespace_only_required_value_is_missing(self):
        validated = validate_row(make_row(Name='   ', Email='john@example.com'), COLUMNS)

        assert validated.errors == ('name is required',)

    def test_invalid_email_format(self):
        validated = validate_row(make_row(Name='John', Email='not-an-email'), COLUMNS)

        assert validated.valid is False
        assert validated.errors == ('Invalid email format',)

    def test_invalid_phone_format(self):
        validated = validate_row(make_row(Name='John', Email='john@example.com', Phone='abc'), COLUMNS)

        assert validated.valid is False
        assert validated.errors == ('Invalid phone format',)

    @pytest.mark.parametrize('phone', ['+1 (555) 123-4567', '555.123.4567', '1234567'])
    def test_accepts_common_phone_formats(self, phone):
        validated = validate_row(make_row(Name='John', Email='john@example.com', Phone=phone), COLUMNS)

        assert validated.valid is True

    def test_non_ascii_digits_are_not_a_phone(self):
        validated = validate_row(make_row(Name='John', Email='john@example.com', Phone='\u0661\u0662\u0663\u0664\u0665\u0666\u0667'), COLUMNS)

        assert validated.errors == ('Invalid phone format',)

    def test_blank_optional_phone_is_fine(self):
        validated = validate_row(make_row(Name='John', Email='john@example.com'), COLUMNS)

        assert validated.valid is True

    def test_collects_every_violation(self):
        validated = validate_row(make_row(Email='bad', Phone='x'), COLUMNS)

        assert validated.errors == ('name is required', 'Invalid email format', 'Invalid phone format')

    def test_unmapped_source_column_counts_as_blank(self):
        columns = [ColumnMapping('E-mail', TargetField.EMAIL, required=True)]

        validated = validate_row(freeze_row({'Email': 'john@example.com'}), columns)

        assert validated.errors == ('email is required',)

    def test_data_is_the_input_row(self):
        row = make_row(Name='John', Email='john@example.com')

        assert validate_row(row, COLUMNS).data is row

    def test_no_columns_means_valid(self):
        assert validate_row(make_row(), []).valid is True


class TestGeneratePreview:
    """Summary counts and the sample"""

    def test_counts_valid_and_invalid_rows(self):
        rows = [
            make_row(Name='John', Email='john@example.com'),
            make_row(Name='', Email='jane@example.com'),
            make_row(Name='Bob', Email='invalid'),
        ]

        preview = generate_preview(rows, COLUMNS)

        assert preview.total_rows == 3
        assert preview.valid_rows == 1
        assert preview.invalid_rows == 2
        assert preview.valid_rows + preview.invalid_rows == preview.total_rows

    def test_sample_is_first_rows_in_order(self):
        rows = [make_row(Name=f'Member {i}', Email=f'm{i}@example.com') for i in range(10)]

        preview = generate_preview(rows, COLUMNS)

        assert len(preview.sample_rows) == 5
        assert [r.data['Name'] for r in preview.sample_rows] == [f'Member {i}' for i in range(5)]

    def test_sample_includes_invalid_rows(self):
        rows = [make_row(Email='bad'), make_row(Name='Jane', Email='jane@example.com')]

        preview = generate_preview(rows, COLUMNS)

        assert [r.valid for r in preview.sample_rows] == [False, True]

    def test_sample_size_is_configurable(self):
        rows = [make_row(Name='John', Email='john@example.com')] * 4

        assert len(generate_preview(rows, COLUMNS, sample_size=2).sample_rows) == 2
        assert len(generate_preview(rows, COLUMNS, sample_size=10).sample_rows) == 4

    def test_empty_rows(self):
        preview = generate_preview([], COLUMNS)

        assert (preview.total_rows, preview.valid_rows, preview.invalid_rows) == (0, 0, 0)
        assert preview.sample_rows == ()

    def test_to_dict_uses_api_field_names(self):
        rows = parse_csv("Name,Email,Phone\nJohn,john@example.com,+1234567890\n,bad,")

        payload = generate_preview(rows, COLUMNS).to_dict()

        assert payload['totalRows'] == 2
        assert payload['validRows'] == 1
        assert payload['invalidRows'] == 1
        assert payload['columns'][0] == {'source': 'Name', 'target': 'name', 'required': True}
        assert payload['sampleRows'][0] == {
            'data': {'Name': 'John', 'Email': 'john@example.com', 'Phone': '+1234567890'},
            'valid': True,
            'errors': [],
        }
        assert payload['sampleRows'][1]['errors'] == ['name is required', 'Invalid email format']
