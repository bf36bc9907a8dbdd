import pytest

from icstools.render import ParamStyle, begin, end, render_property


def test_render_plain_property():
    assert render_property("DTSTART", None, "20240101T090000Z") == "DTSTART:20240101T090000Z\n"


def test_render_multi_value_param_bare():
    assert render_property("NAME", [("TZID", ["x", "y"])], "v") == "NAME;TZID=x,y:v\n"


def test_render_multi_value_param_quoted():
    line = render_property("NAME", [("TZID", ["x", "y"])], "v", ParamStyle.QUOTED)
    assert line == 'NAME;TZID="x","y":v\n'


def test_render_keeps_param_order():
    params = [("VALUE", ["DATE-TIME"]), ("TZID", ["Europe/Paris"]), ("X-B", ["2", "1"])]
    line = render_property("DTSTART", params, "20240101T090000")
    assert line == "DTSTART;VALUE=DATE-TIME;TZID=Europe/Paris;X-B=2,1:20240101T090000\n"


def test_render_missing_value_keeps_colon():
    assert render_property("STATUS", None, None) == "STATUS:\n"


def test_render_empty_param_values():
    assert render_property("X", [("P", [])], "v") == "X;P=:v\n"


def test_block_delimiters():
    assert begin("VEVENT") == "BEGIN:VEVENT\n"
    assert end("VEVENT") == "END:VEVENT\n"


@pytest.mark.parametrize("value", ["a,b", "mailto:a@example.com", "x;y"])
def test_render_bare_quotes_special_values(value):
    assert render_property("X", [("P", [value, "plain"])], "v") == f'X;P="{value}",plain:v\n'
