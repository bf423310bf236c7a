import argparse

import pytest

from conftest import sid, write_table
from syscodes.cli import main, positive_int_arg, syscode_id_arg


def _run(capsys, tables, *args):
    code_file, subset_file = tables
    main(["--code-file", str(code_file), "--subset-file", str(subset_file), *args])
    return capsys.readouterr().out


def test_syscode_id_arg_accepts_decimal_and_hex():
    assert syscode_id_arg(str(sid(100))) == sid(100)
    assert syscode_id_arg(f"0x{sid(100):x}") == sid(100)
    assert syscode_id_arg(f"{sid(100):x}") == sid(100)
    with pytest.raises(argparse.ArgumentTypeError):
        syscode_id_arg("not-an-id")


def test_show_prints_rendered_syscode(capsys, sample_tables):
    out = _run(capsys, sample_tables, "show", f"{sid(100):x}")
    assert out.startswith(f"Syscode {sid(100):x} = decimal {sid(100)}\n")
    assert "\t2 group members found\n" in out
    assert "\t2 subset entries found\n" in out


def test_show_unknown_id_exits(capsys, sample_tables):
    with pytest.raises(SystemExit) as excinfo:
        _run(capsys, sample_tables, "show", "0x1")
    assert "not found" in str(excinfo.value.code)


def test_search_lists_references(capsys, sample_tables):
    out = _run(capsys, sample_tables, "search", "Country", "--limit", "2")
    assert out.splitlines() == [
        "3 syscodes found",
        f"\t{sid(5000):x} `Country`",
        f"\t{sid(5001):x} `CountryCH`",
        "\t... _(skipping 1 syscode)_",
    ]


def test_search_single_hit_renders(capsys, sample_tables):
    out = _run(capsys, sample_tables, "search", "EUR")
    assert out.startswith(f"Syscode {sid(102):x}")


def test_translations_and_stats(capsys, sample_tables):
    out = _run(capsys, sample_tables, "translations")
    assert "Swiss franc\tSchweizer Franken" in out.splitlines()
    assert "GERMANY" not in out

    out = _run(capsys, sample_tables, "stats")
    assert "Syscodes: 6" in out


def test_load_failure_exits_with_path(capsys, tmp_path):
    code_file = write_table(tmp_path / "codes.csv", [["nope"]])
    subset_file = write_table(tmp_path / "subsets.csv", [])

    with pytest.raises(SystemExit) as excinfo:
        _run(capsys, (code_file, subset_file), "stats")
    assert "codes.csv" in str(excinfo.value.code)


def test_positive_int_arg_rejects_zero_and_negative():
    assert positive_int_arg("3") == 3
    for text in ("0", "-1", "zwei"):
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int_arg(text)


@pytest.mark.parametrize("limit", ["0", "-1"])
def test_search_rejects_non_positive_limit(capsys, sample_tables, limit):
    with pytest.raises(SystemExit) as excinfo:
        _run(capsys, sample_tables, "search", "Country", "--limit", limit)
    assert excinfo.value.code == 2
    assert "must be at least 1" in capsys.readouterr().err
