import pytest

from envfixer.entries import LF, LineEntry, LintKind
from envfixer.entries import Warning as LintWarning
from envfixer.fixing import DuplicatedKeyFixer, EndingBlankLineFixer, fix_list, run


def line_entry(number, total, raw):
    return LineEntry(number, raw, number == total)


def blank_line_entry(number, total):
    return LineEntry(number, LF, number == total)


def lowercase_warnings(lines, *indexes):
    return [
        LintWarning(
            lines[i].number,
            LintKind.LOWERCASE_KEY,
            f"The {lines[i].key()} key should be in uppercase",
        )
        for i in indexes
    ]


def five_lines():
    return [
        line_entry(1, 5, "A1=1"),
        line_entry(2, 5, "A2=2"),
        line_entry(3, 5, "a0=0"),
        line_entry(4, 5, "a2=2"),
        blank_line_entry(5, 5),
    ]


def test_run_with_empty_warnings():
    lines = [line_entry(1, 2, "A=B"), blank_line_entry(2, 2)]
    assert run([], lines, []) == 0
    assert [l.raw_string for l in lines] == ["A=B", "\n"]


def test_run_with_fixable_warning():
    lines = [line_entry(1, 3, "A=B"), line_entry(2, 3, "c=d"), blank_line_entry(3, 3)]
    warnings = lowercase_warnings(lines, 1)
    assert run(warnings, lines, []) == 1
    assert lines[1].raw_string == "C=d"


def test_run_when_lines_do_not_fit_numbers():
    lines = [line_entry(1, 3, "a=B"), line_entry(4, 3, "c=D"), blank_line_entry(3, 3)]
    warnings = lowercase_warnings(lines, 0, 1)
    assert run(warnings, lines, []) == 2


def test_new_warnings_after_fix():
    lines = five_lines()
    warnings = lowercase_warnings(lines, 2, 3)
    assert run(warnings, lines, []) == 2
    assert [l.raw_string for l in lines] == ["A0=0", "A1=1", "A2=2", "# A2=2", "\n"]


def test_skip_duplicated_key():
    lines = five_lines()
    warnings = lowercase_warnings(lines, 2, 3)
    assert run(warnings, lines, [LintKind.DUPLICATED_KEY]) == 2
    assert [l.raw_string for l in lines] == ["A0=0", "A1=1", "A2=2", "A2=2", "\n"]


def test_skip_unordered_key():
    lines = five_lines()
    warnings = lowercase_warnings(lines, 2, 3)
    assert run(warnings, lines, [LintKind.UNORDERED_KEY]) == 2
    assert [l.raw_string for l in lines] == ["A1=1", "A2=2", "A0=0", "# A2=2", "\n"]


def test_run_returns_zero_when_warned_line_is_missing():
    lines = [line_entry(1, 2, "a=B"), blank_line_entry(2, 2)]
    warnings = [LintWarning(7, LintKind.LOWERCASE_KEY, "The a key should be in uppercase")]
    assert run(warnings, lines, []) == 0


def test_run_removes_deleted_blank_lines():
    lines = [
        line_entry(1, 5, "A=B"),
        line_entry(2, 5, ""),
        line_entry(3, 5, ""),
        line_entry(4, 5, "C=D"),
        blank_line_entry(5, 5),
    ]
    warnings = [LintWarning(3, LintKind.EXTRA_BLANK_LINE, "Extra blank line detected")]
    assert run(warnings, lines, []) == 1
    assert [l.number for l in lines] == [1, 2, 4, 5]


def test_fix_list_order_ends_with_file_fixers():
    kinds = [fixer.kind for fixer in fix_list()]
    assert kinds[-3:] == [
        LintKind.UNORDERED_KEY,
        LintKind.DUPLICATED_KEY,
        LintKind.ENDING_BLANK_LINE,
    ]
    assert kinds[0] == LintKind.KEY_WITHOUT_VALUE
    assert len(set(kinds)) == len(LintKind)


def test_duplicated_fix_warnings():
    fixer = DuplicatedKeyFixer()
    lines = [
        line_entry(1, 4, "FOO=BAR"),
        line_entry(2, 4, "Z=Y"),
        line_entry(3, 4, "FOO=BAZ"),
        line_entry(4, 4, "Z=X"),
    ]
    warning_lines = [lines[2].number, lines[3].number]
    assert fixer.fix_warnings(warning_lines, lines) == 2
    assert lines[2] == line_entry(3, 4, "# FOO=BAZ")
    assert lines[3] == line_entry(4, 4, "# Z=X")
    assert lines[:2] == [line_entry(1, 4, "FOO=BAR"), line_entry(2, 4, "Z=Y")]


def test_duplicated_fix_lines_without_warnings():
    fixer = DuplicatedKeyFixer()
    lines = [
        line_entry(1, 4, "FOO=BAR"),
        line_entry(2, 4, "FOO=BAZ"),
        line_entry(3, 4, "Z=Y"),
        line_entry(4, 4, "Z=X"),
    ]
    assert fixer.fix_warnings([], lines) == 0
    assert [l.raw_string for l in lines] == ["FOO=BAR", "# FOO=BAZ", "Z=Y", "# Z=X"]


def test_duplicated_control_comment_at_first_line():
    fixer = DuplicatedKeyFixer()
    raw = ["# dotenv-linter:off DuplicatedKey", "FOO=BAR", "FOO=BAZ", "Z=Y", "Z=X"]
    lines = [line_entry(i, 5, r) for i, r in enumerate(raw, start=1)]
    assert fixer.fix_warnings([], lines) == 0
    assert [l.raw_string for l in lines] == raw


def test_duplicated_control_comment_in_the_middle():
    fixer = DuplicatedKeyFixer()
    raw = [
        "FOO=BAR",
        "# dotenv-linter:off DuplicatedKey",
        "FOO=BAZ",
        "Z=Y",
        "# dotenv-linter:on DuplicatedKey",
        "Z=X",
    ]
    lines = [line_entry(i, 6, r) for i, r in enumerate(raw, start=1)]
    assert fixer.fix_warnings([], lines) == 0
    assert [l.raw_string for l in lines] == raw


def test_duplicated_unrelated_control_comment():
    fixer = DuplicatedKeyFixer()
    raw = ["# dotenv-linter:off LowercaseKey", "FOO=BAR", "FOO=BAZ", "Z=Y", "Z=X"]
    lines = [line_entry(i, 5, r) for i, r in enumerate(raw, start=1)]
    assert fixer.fix_warnings([], lines) == 0
    assert [l.raw_string for l in lines] == [
        "# dotenv-linter:off LowercaseKey",
        "FOO=BAR",
        "# FOO=BAZ",
        "Z=Y",
        "# Z=X",
    ]


def test_ending_blank_line_fix_warnings():
    fixer = EndingBlankLineFixer()
    lines = [line_entry(1, 2, "FOO=BAR"), line_entry(2, 2, "Z=Y")]
    assert fixer.fix_warnings([lines[1].number], lines) == 1
    assert lines[2].raw_string == "\n"


def test_ending_blank_line_exists():
    fixer = EndingBlankLineFixer()
    lines = [line_entry(1, 2, "FOO=BAR"), line_entry(2, 2, LF)]
    assert fixer.fix_warnings([], lines) == 0
    assert len(lines) == 2


def test_ending_blank_line_without_lines_raises():
    with pytest.raises(LookupError):
        EndingBlankLineFixer().fix_warnings([], [])