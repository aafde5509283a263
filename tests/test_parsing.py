import pytest

from riskdata.parsing import (
    POINT,
    RISK,
    CSVParseError,
    EmptyUploadError,
    classify,
    point_fields,
    read_rows,
    risk_fields,
    to_float,
    to_int,
)


def write(tmp_path, content: bytes):
    path = tmp_path / "data.csv"
    path.write_bytes(content)
    return path


def test_read_rows_keeps_everything_as_text(tmp_path):
    path = write(tmp_path, b"x,y\n1,\n,2.5\n")

    assert read_rows(path) == [{"x": "1", "y": ""}, {"x": "", "y": "2.5"}]


def test_read_rows_cleans_headers(tmp_path):
    path = write(tmp_path, "\ufeff Risk Score ,Hotspot\n3,HS1\n".encode("utf-8"))

    assert read_rows(path) == [{"Risk Score": "3", "Hotspot": "HS1"}]


def test_header_only_file_has_no_rows(tmp_path):
    assert read_rows(write(tmp_path, b"x,y\n")) == []


def test_empty_file(tmp_path):
    with pytest.raises(EmptyUploadError):
        read_rows(write(tmp_path, b""))


def test_broken_quotes(tmp_path):
    with pytest.raises(CSVParseError):
        read_rows(write(tmp_path, b'a,b\n"never closed,1\n'))


@pytest.mark.parametrize("column", ["Respondent Type", "Risk Score", "Metric Name"])
def test_any_indicator_column_means_risk(column):
    assert classify([{column: ""}, {"x": "1"}]) == RISK


def test_first_row_only():
    assert classify([{"x": "1"}, {"Risk Score": "5"}]) == POINT
    assert classify([]) == POINT


def test_number_coercion():
    assert to_float("2.5") == 2.5
    assert to_float("") == 0
    assert to_float("nan") == 0
    assert to_float("inf") == 0
    assert to_float(None) == 0
    assert to_int("3") == 3
    assert to_int("3.0") == 3
    assert to_int("") == 1
    assert to_int("phase two") == 1
    assert to_int("99999999999999999999") == 1
    assert to_int("-3000000000") == 1
    assert to_int("2147483647") == 2147483647


def test_risk_fields_for_sparse_row():
    fields = risk_fields({"Risk Score": "7.25", "Hotspot": "HS2"})

    assert fields["risk_score"] == 7.25
    assert fields["hotspot"] == "HS2"
    assert fields["metric_name"] is None
    assert fields["phase"] == 1
    assert fields["likelihood"] == 0


def test_point_fields_ignore_other_columns():
    assert point_fields({"x": "1", "y": "oops", "z": "9"}) == {"x": 1.0, "y": 0.0}
