from datetime import date

from django.test import SimpleTestCase

from apps.draws.services.dates import CSV, DASHED, DOTTED, SLASHED, canonical, normalize_date
from apps.draws.services.errors import PARSE_DATE, DateParseError, ValidationError
from apps.draws.services.validation import parse_tokens, split_groups, split_numbers


class NormalizeDateTests(SimpleTestCase):
    def test_known_formats(self):
        assert normalize_date('05.02.2024', DOTTED) == date(2024, 2, 5)
        assert normalize_date('22-01-2024', DASHED) == date(2024, 1, 22)
        assert normalize_date('26/01/2024', SLASHED) == date(2024, 1, 26)
        assert normalize_date('22-Jan-2024', CSV) == date(2024, 1, 22)
        assert normalize_date(' 09.12.2023\n', DOTTED) == date(2023, 12, 9)

    def test_canonical_is_zero_padded_iso(self):
        assert canonical(normalize_date('05-02-2024', DASHED)) == '2024-02-05'
        assert canonical(date(2024, 1, 9)) < canonical(date(2024, 1, 15))

    def test_rejects_other_shapes(self):
        for value, date_format in [
            ('5.2.2024', DOTTED),
            ('05/02/2024', DOTTED),
            ('2024-02-05', DASHED),
            ('05.02.24', DOTTED),
            ('22-jan-2024', CSV),
            ('22-January-2024', CSV),
            ('Data 26/01/2024', SLASHED),
            ('', SLASHED),
        ]:
            with self.subTest(value=value):
                with self.assertRaises(DateParseError) as ctx:
                    normalize_date(value, date_format)
                assert ctx.exception.stage == PARSE_DATE

    def test_rejects_impossible_dates(self):
        with self.assertRaises(DateParseError):
            normalize_date('31.02.2024', DOTTED)
        with self.assertRaises(DateParseError):
            normalize_date('12-13-2024', DASHED)

    def test_unknown_format_is_a_programming_error(self):
        with self.assertRaises(ValueError):
            normalize_date('05.02.2024', 'yyyy.mm.dd')


class ValidatorTests(SimpleTestCase):
    def test_split_numbers_positional(self):
        main, stars = split_numbers(['3', '17', '22', '41', '49', '5', '11'])
        assert main == [3, 17, 22, 41, 49]
        assert stars == [5, 11]

    def test_split_numbers_too_few(self):
        with self.assertRaises(ValidationError) as ctx:
            split_numbers(['3', '17', '22', '41', '49', '5'])
        assert ctx.exception.kind == ValidationError.TOO_FEW

    def test_split_numbers_too_many_names_extra_token(self):
        with self.assertRaises(ValidationError) as ctx:
            split_numbers(['3', '17', '22', '41', '49', '5', '11', '2024'])
        assert ctx.exception.kind == ValidationError.TOO_MANY
        assert ctx.exception.token == '2024'

    def test_non_numeric_token(self):
        with self.assertRaises(ValidationError) as ctx:
            split_numbers(['3', '17', 'x22', '41', '49', '5', '11'])
        assert ctx.exception.kind == ValidationError.NON_NUMERIC
        assert ctx.exception.token == 'x22'

    def test_parse_tokens_strips_whitespace_and_leading_zeros(self):
        assert parse_tokens([' 08', '15 ']) == [8, 15]

    def test_split_groups(self):
        main, stars = split_groups(['08', '15', '27', '33', '44'], ['02', '12'])
        assert main == [8, 15, 27, 33, 44]
        assert stars == [2, 12]

    def test_split_groups_checks_each_group(self):
        with self.assertRaises(ValidationError) as ctx:
            split_groups(['8', '15', '27', '33'], ['2', '12', '3'])
        assert ctx.exception.kind == ValidationError.TOO_FEW
        with self.assertRaises(ValidationError) as ctx:
            split_groups(['8', '15', '27', '33', '44'], ['2', '12', '3'])
        assert ctx.exception.kind == ValidationError.TOO_MANY
