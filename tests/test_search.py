"""Tests for running searches and rendering entries."""

import io

import pytest

from ask_ldap.ldap import SearchError
from ask_ldap.models import Config, Entry, SearchResult
from ask_ldap.search import render_entry, render_result, run_queries, run_search


class FakeSession:
    """Returns canned results per filter; filters mapped to an exception raise it."""

    def __init__(self, results):
        self.results = results
        self.calls = []

    def search(self, base_dn, search_filter, attributes):
        self.calls.append((base_dn, search_filter, list(attributes)))
        outcome = self.results[search_filter]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def jane():
    return Entry(
        dn="CN=Jane Doe,OU=Users,DC=corp,DC=local",
        attributes=[
            ("cn", [b"Jane Doe"]),
            ("memberOf", [b"CN=Admins,DC=corp", b"CN=Staff,DC=corp", b"CN=VPN,DC=corp"]),
            ("pwdLastSet", [b"0"]),
        ],
    )


def test_single_value_inline():
    lines = render_entry(Entry(dn="CN=x", attributes=[("cn", [b"x"])]))
    assert lines == [
        "ENTRY: 'CN=x'",
        "    " + "cn".rjust(20) + ": 'x'",
    ]


def test_multi_value_block_keeps_order():
    lines = render_entry(jane())

    assert lines[0] == "ENTRY: 'CN=Jane Doe,OU=Users,DC=corp,DC=local'"
    assert lines[2] == "    " + "memberOf".rjust(20) + ":"
    values = lines[3:6]
    assert values == [
        " " * 26 + "'CN=Admins,DC=corp'",
        " " * 26 + "'CN=Staff,DC=corp'",
        " " * 26 + "'CN=VPN,DC=corp'",
    ]
    assert lines[6] == "    " + "pwdLastSet".rjust(20) + ": n/a"
    assert len(lines) == 7


def test_attribute_without_values_prints_name_only():
    lines = render_entry(Entry(dn="CN=x", attributes=[("member", [])]))
    assert lines[1] == "    " + "member".rjust(20) + ":"
    assert len(lines) == 2


def test_render_result_block():
    result = SearchResult(entries=[jane()], referrals=["ldap://b.corp/DC=b"])
    text = render_result("(cn=Jane*)", result)
    lines = text.splitlines()

    assert lines[0] == "SEARCH:: '(cn=Jane*)'"
    assert lines[1] == "RESULT::"
    assert lines[2] == "1 entries, 1 referrals (success)"
    assert lines[3] == "REFERRAL: 'ldap://b.corp/DC=b'"
    assert lines[4].startswith("ENTRY: ")
    assert text.endswith("\n")


def test_run_search_passes_through():
    expected = SearchResult()
    session = FakeSession({"(cn=*)": expected})
    assert run_search(session, "DC=corp", "(cn=*)", ["cn"]) is expected
    assert session.calls == [("DC=corp", "(cn=*)", ["cn"])]


def test_run_queries_uses_verbosity_and_base_dn():
    session = FakeSession({"(cn=a)": SearchResult(), "(cn=b)": SearchResult()})
    out = io.StringIO()

    failures = run_queries(session, Config(base_dn="DC=corp", verbosity=0), ["(cn=a)", "(cn=b)"], out=out)

    assert failures == 0
    assert session.calls == [
        ("DC=corp", "(cn=a)", ["cn", "distinguishedName"]),
        ("DC=corp", "(cn=b)", ["cn", "distinguishedName"]),
    ]
    assert out.getvalue().index("(cn=a)") < out.getvalue().index("(cn=b)")


def test_failed_query_does_not_stop_the_next(capsys):
    session = FakeSession({
        "(bad": SearchError("filter error"),
        "(cn=Jane*)": SearchResult(entries=[jane()]),
    })
    out = io.StringIO()

    failures = run_queries(session, Config(), ["(bad", "(cn=Jane*)"], out=out)

    assert failures == 1
    assert [call[1] for call in session.calls] == ["(bad", "(cn=Jane*)"]
    assert "SEARCH:: '(bad'" not in out.getvalue()
    assert "SEARCH:: '(cn=Jane*)'" in out.getvalue()
    assert "ENTRY: 'CN=Jane Doe,OU=Users,DC=corp,DC=local'" in out.getvalue()
    assert "filter error" in capsys.readouterr().err


def test_other_errors_propagate():
    session = FakeSession({"(cn=a)": RuntimeError("boom")})
    with pytest.raises(RuntimeError):
        run_queries(session, Config(), ["(cn=a)"], out=io.StringIO())


def test_run_queries_defaults_to_stdout(capsys):
    session = FakeSession({"(cn=a)": SearchResult()})
    run_queries(session, Config(), ["(cn=a)"])
    assert "SEARCH:: '(cn=a)'" in capsys.readouterr().out
