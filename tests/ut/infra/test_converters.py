from datetime import date, datetime

import pytest

from tests.helpers import Color

from jsonhelpers.core.errors import DecodingError
from jsonhelpers.core.facade import from_string, to_string
from jsonhelpers.infra.converters import IsoDateTimeConverter, StringEnumConverter


@pytest.mark.ut
def test_iso_converter_claims_dates_only():
    converter = IsoDateTimeConverter()

    assert converter.can_convert(datetime)
    assert converter.can_convert(date)
    assert not converter.can_convert(str)
    assert not converter.can_convert(list[datetime])


@pytest.mark.ut
def test_iso_converter_default_format():
    at = datetime(2026, 10, 19, 8, 30)

    text = to_string({"at": at}, converters=[IsoDateTimeConverter()])

    assert text == '{"at":"2026-10-19T08:30:00"}'
    assert from_string('"2026-10-19T08:30:00"', datetime, converters=[IsoDateTimeConverter()]) == at


@pytest.mark.ut
def test_iso_converter_custom_format():
    converter = IsoDateTimeConverter("%d/%m/%Y %H:%M")
    at = datetime(2026, 10, 19, 8, 30)

    assert to_string({"at": at}, converters=[converter]) == '{"at":"19/10/2026 08:30"}'
    assert from_string('"19/10/2026 08:30"', datetime, converters=[converter]) == at


@pytest.mark.ut
def test_iso_converter_custom_format_for_dates():
    converter = IsoDateTimeConverter("%d/%m/%Y")

    assert to_string(date(2026, 10, 19), converters=[converter]) == '"19/10/2026"'
    assert from_string('"19/10/2026"', date, converters=[converter]) == date(2026, 10, 19)


@pytest.mark.ut
def test_iso_converter_rejects_non_strings():
    with pytest.raises(DecodingError):
        from_string("20261019", date, converters=[IsoDateTimeConverter()])


@pytest.mark.ut
def test_string_enum_converter():
    converter = StringEnumConverter()

    assert to_string(Color.GREEN) == '"green"'
    assert to_string(Color.GREEN, converters=[converter]) == '"GREEN"'
    assert from_string('"GREEN"', Color, converters=[converter]) is Color.GREEN


@pytest.mark.ut
def test_string_enum_converter_unknown_member():
    with pytest.raises(DecodingError):
        from_string('"BLUE"', Color, converters=[StringEnumConverter()])
