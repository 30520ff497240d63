"""
State machine behaviour, row by row.
Run with: pytest tests/test_fsm.py
"""
import logging

import pytest

from pyfsmini import FsmState, IniMalformedError, IniParseError, IniStateMachine
from pyfsmini.ini.consts import WILDCARD
from pyfsmini.ini.fsm import RELAXED_RULES, STRICT_RULES


def run(text, strict=False):
    fsm = IniStateMachine(strict=strict)
    fsm.feed(text)
    return fsm, fsm.finish()


def pairs(section):
    return section.to_pairs()

# ==========================================
# 1. Table
# ==========================================

def test_every_state_has_a_wildcard():
    for state in FsmState:
        if state is FsmState.Invalid:
            continue
        assert any(r.state is state and r.trigger == WILDCARD
                   for r in RELAXED_RULES), state


def test_first_matching_row_wins():
    fsm = IniStateMachine()
    fsm.state = FsmState.InValue
    assert fsm.match('"').target is FsmState.InQuotedValue
    assert fsm.match(';').target is FsmState.Comment
    assert fsm.match('x').target is FsmState.InValue
    fsm.state = FsmState.InQuotedValue
    assert fsm.match(';').target is FsmState.InQuotedValue
    assert fsm.match('\\').target is FsmState.AfterEscape


def test_strict_rows_sit_before_section_wildcard():
    rows = [r for r in STRICT_RULES if r.state is FsmState.InSectionName]
    assert [r.trigger for r in rows] == [']', ';', '#', WILDCARD]
    assert not any(r.state is FsmState.Invalid for r in RELAXED_RULES)

# ==========================================
# 2. Options & Sections
# ==========================================

def test_global_pairs():
    _, doc = run("a=1\nb = 2\n")
    assert pairs(doc.global_section) == [('a', '1'), ('b', '2')]
    assert len(doc) == 1


def test_pairs_go_to_last_closed_section():
    _, doc = run("a=1\n[S]\nb=2\n[T]\nc=3\n")
    assert pairs(doc[0]) == [('a', '1')]
    assert [(s.name, pairs(s)) for s in doc[1:]] == [
        ('S', [('b', '2')]), ('T', [('c', '3')])]


def test_section_name_is_verbatim():
    _, doc = run("[ab;cd]\n[a b]\n[x#y]\n[a[b]\n")
    assert [s.name for s in doc[1:]] == ['ab;cd', 'a b', 'x#y', 'a[b']


def test_section_name_may_span_lines():
    _, doc = run("[a\nb]\n")
    assert doc[1].name == 'a\nb'


def test_trailing_text_after_header_is_ignored():
    _, doc = run("[S] junk = 1\nk=v\n")
    assert doc[1].name == 'S'
    assert pairs(doc[1]) == [('k', 'v')]


def test_blanks_are_dropped_from_keys_and_plain_values():
    _, doc = run("key name = a b\t c\n")
    assert pairs(doc[0]) == [('keyname', 'abc')]


def test_equal_sign_inside_value_is_kept():
    _, doc = run("q=a=b\nr=\"x=y\"\n")
    assert pairs(doc[0]) == [('q', 'a=b'), ('r', 'x=y')]


def test_delimiter_commits_key_with_empty_value():
    _, doc = run("k=\nk2=v\n")
    assert pairs(doc[0]) == [('k', ''), ('k2', 'v')]


def test_pending_key_survives_line_break():
    _, doc = run("foo\nbar=1\n")
    assert pairs(doc[0]) == [('foobar', '1')]


def test_keyless_value_extends_last_option():
    _, doc = run("a=1\n=2\n")
    assert pairs(doc[0]) == [('a', '12')]


def test_keyless_value_without_any_option_is_dropped(caplog):
    with caplog.at_level(logging.WARNING):
        _, doc = run("=x\n")
    assert pairs(doc[0]) == []
    assert 'dropped' in caplog.text


def test_dangling_key_without_value_is_discarded():
    _, doc = run("lonely")
    assert pairs(doc[0]) == []


def test_unicode_chars():
    _, doc = run('ключ=значение\n[節]\n名前="値 ;#"\n')
    assert pairs(doc[0]) == [('ключ', 'значение')]
    assert doc[1].name == '節'
    assert pairs(doc[1]) == [('名前', '値 ;#')]

# ==========================================
# 3. Comments, Quotes & Escapes
# ==========================================

def test_comments():
    _, doc = run("; head\n# also\nk=v ; tail\n[S] # tail\nx=1#tail\n")
    assert pairs(doc[0]) == [('k', 'v')]
    assert pairs(doc[1]) == [('x', '1')]


def test_comment_marks_inside_quotes_are_literal():
    _, doc = run('k = "a;b#c"\n')
    assert pairs(doc[0]) == [('k', 'a;b#c')]


def test_escape_copies_exactly_one_char():
    _, doc = run('k = "a\\"b"\nn="\\n\\\\"\n')
    assert pairs(doc[0]) == [('k', 'a"b'), ('n', 'n\\')]


def test_quoted_and_plain_parts_join():
    _, doc = run('k=a"b c"d\n')
    assert pairs(doc[0]) == [('k', 'ab cd')]


def test_multiline_quoted_value_counts_lines():
    fsm, doc = run('k="a\nb"\nx=1\n')
    assert pairs(doc[0]) == [('k', 'a\nb'), ('x', '1')]
    assert fsm.line == 4

# ==========================================
# 4. Line Breaks
# ==========================================

def test_line_counter():
    fsm, _ = run("a=1\n\n[S]\n; c\nb=2\n")
    assert fsm.line == 6


def test_crlf():
    fsm, doc = run("a=1\r\n[S]\r\nb=2\r\n")
    assert pairs(doc[0]) == [('a', '1')]
    assert pairs(doc[1]) == [('b', '2')]
    assert fsm.line == 4


def test_char_after_bare_cr_is_dropped(caplog):
    with caplog.at_level(logging.WARNING):
        fsm, doc = run("k=1\rab=2\n")
    assert pairs(doc[0]) == [('k', '1'), ('b', '2')]
    assert fsm.line == 3
    assert "'a' after a bare CR" in caplog.text

# ==========================================
# 5. Failures
# ==========================================

@pytest.mark.parametrize('text, state', [
    ('; open comment', FsmState.Comment),
    ('[abc', FsmState.InSectionName),
    ('[abc] x', FsmState.AfterSectionClose),
    ('k=1', FsmState.InValue),
    ('k="abc', FsmState.InQuotedValue),
    ('k="abc\n', FsmState.InQuotedValue),
    ('k="a\\', FsmState.AfterEscape),
    ('k=1\r', FsmState.AfterCarriageReturn),
])
def test_malformed_end_states(text, state):
    fsm = IniStateMachine()
    fsm.feed(text)
    with pytest.raises(IniMalformedError) as excinfo:
        fsm.finish()
    assert excinfo.value.state is state
    assert not fsm.document.frozen


def test_strict_rejects_comment_marks_in_section_name():
    with pytest.raises(IniParseError) as excinfo:
        run("a=1\n[ab;cd]\n", strict=True)
    assert excinfo.value.line == 2
    assert excinfo.value.char == ';'


def test_strict_accepts_plain_headers():
    _, doc = run("[ab cd]\nk=v\n", strict=True)
    assert doc[1].name == 'ab cd'


def test_finished_document_is_frozen():
    _, doc = run("a=1\n")
    assert doc.frozen
    with pytest.raises(RuntimeError):
        doc.append_section('late')
