from syscodes.reader import read_rows


def test_read_rows_splits_on_semicolon(tmp_path):
    path = tmp_path / "t.csv"
    path.write_text("1;a;b\n2;;c\n", encoding="utf-8")
    assert read_rows(path) == [["1", "a", "b"], ["2", "", "c"]]


def test_read_rows_utf8_bom(tmp_path):
    path = tmp_path / "t.csv"
    path.write_bytes(b"\xef\xbb\xbf" + "1;Währung".encode("utf-8"))
    assert read_rows(path) == [["1", "Währung"]]


def test_read_rows_utf16(tmp_path):
    path = tmp_path / "t.csv"
    path.write_text("1;Währung\r\n", encoding="utf-16")
    assert read_rows(path) == [["1", "Währung"]]


def test_read_rows_windows_1252_fallback(tmp_path):
    path = tmp_path / "t.csv"
    path.write_bytes("1;Währung".encode("cp1252"))
    assert read_rows(path) == [["1", "Währung"]]


def test_read_rows_empty_file(tmp_path):
    path = tmp_path / "t.csv"
    path.write_bytes(b"")
    assert read_rows(path) == []


def test_read_rows_keeps_form_feed_and_line_separator_inside_fields(tmp_path):
    path = tmp_path / "t.csv"
    path.write_text("1;a\x0cb;med\u2028ium\x1cx\n2;c\n", encoding="utf-8")

    rows = read_rows(path)

    assert rows == [["1", "a\x0cb", "med\u2028ium\x1cx"], ["2", "c"]]


def test_read_rows_mixed_line_endings(tmp_path):
    path = tmp_path / "t.csv"
    path.write_bytes(b"1;a\r2;b\r\n3;c\n")
    assert read_rows(path) == [["1", "a"], ["2", "b"], ["3", "c"]]
