"""Tests for the removeparam filter list parser."""

from nutcracker.filters.models import ExactMatcher, RegexMatcher
from nutcracker.filters.parser import (
    compile_matcher,
    find_options_separator,
    parse_filter_list,
    split_options,
)


def test_parse_empty_input() -> None:
    assert parse_filter_list("") == ()


def test_parse_skips_comments() -> None:
    assert parse_filter_list("! comment\n") == ()
    assert parse_filter_list("! This is a comment\n! Another comment") == ()


def test_parse_skips_blank_lines() -> None:
    assert parse_filter_list("\n\n\n") == ()


def test_parse_skips_cosmetic_filters() -> None:
    text = (
        "example.com##.ad-banner\n"
        "example.com#@#.ad-banner\n"
        "example.com##+js(abort-on-property-read.js)\n"
        "example.com##.x$removeparam=fbclid\n"
    )
    assert parse_filter_list(text) == ()


def test_parse_skips_non_removeparam_rules() -> None:
    assert parse_filter_list("||example.com^$third-party") == ()


def test_parse_exact_param_rule() -> None:
    rules = parse_filter_list("||example.com^$removeparam=fbclid")
    assert len(rules) == 1
    rule = rules[0]
    assert rule.is_exception is False
    assert rule.domains == ("example.com",)
    assert rule.matcher == ExactMatcher(name="fbclid")


def test_parse_global_rule_has_empty_scope() -> None:
    rules = parse_filter_list("*$removeparam=utm_source")
    assert len(rules) == 1
    assert rules[0].domains == ()
    assert rules[0].matcher == ExactMatcher(name="utm_source")


def test_parse_exception_rule() -> None:
    rules = parse_filter_list("@@||example.com^$removeparam=fbclid")
    assert len(rules) == 1
    assert rules[0].is_exception is True
    assert rules[0].domains == ("example.com",)


def test_parse_regex_rule() -> None:
    rules = parse_filter_list("||example.com^$removeparam=/^utm_/")
    assert len(rules) == 1
    matcher = rules[0].matcher
    assert isinstance(matcher, RegexMatcher)
    assert matcher.case_insensitive is False
    assert matcher.pattern.search("utm_source=test") is not None
    assert matcher.pattern.search("UTM_source=test") is None


def test_parse_regex_case_insensitive_with_end_anchor() -> None:
    rules = parse_filter_list("||example.com^$removeparam=/^from=rss$/i")
    assert len(rules) == 1
    matcher = rules[0].matcher
    assert isinstance(matcher, RegexMatcher)
    assert matcher.case_insensitive is True
    assert matcher.pattern.search("from=RSS") is not None
    assert matcher.pattern.search("from=rss2") is None


def test_parse_wildcard_tld_pattern() -> None:
    rules = parse_filter_list("||bing.*$removeparam=cvid")
    assert len(rules) == 1
    assert rules[0].domains == ("bing",)


def test_parse_domain_stops_at_path() -> None:
    rules = parse_filter_list("||example.com/path/$removeparam=ref")
    assert rules[0].domains == ("example.com",)


def test_parse_unbalanced_slash_hides_options() -> None:
    assert parse_filter_list("||example.com/path$removeparam=ref") == ()


def test_parse_domain_option() -> None:
    rules = parse_filter_list("*$removeparam=ref,domain=example.com|test.org")
    assert len(rules) == 1
    assert rules[0].domains == ("example.com", "test.org")


def test_parse_drops_negated_domains() -> None:
    rules = parse_filter_list("*$removeparam=ref,domain=example.com|~excluded.com")
    assert len(rules) == 1
    assert rules[0].domains == ("example.com",)


def test_parse_only_negated_domains_leaves_global_scope() -> None:
    rules = parse_filter_list("*$removeparam=ref,domain=~excluded.com")
    assert rules[0].domains == ()


def test_parse_pattern_domain_precedes_option_domains() -> None:
    rules = parse_filter_list(
        "||example.com^$removeparam=ref,domain=example.com| other.net "
    )
    assert rules[0].domains == ("example.com", "example.com", "other.net")


def test_parse_skips_bare_removeparam() -> None:
    assert parse_filter_list("||example.com^$removeparam") == ()


def test_parse_skips_empty_removeparam_value() -> None:
    assert parse_filter_list("||example.com^$removeparam=") == ()


def test_parse_bare_removeparam_does_not_hide_later_value() -> None:
    rules = parse_filter_list("||example.com^$removeparam,removeparam=gclid")
    assert len(rules) == 1
    assert rules[0].matcher == ExactMatcher(name="gclid")


def test_parse_first_removeparam_wins() -> None:
    rules = parse_filter_list("*$removeparam=first,removeparam=second")
    assert len(rules) == 1
    assert rules[0].matcher == ExactMatcher(name="first")


def test_parse_skips_invalid_regex() -> None:
    text = "*$removeparam=/(unclosed/\n*$removeparam=fbclid\n"
    rules = parse_filter_list(text)
    assert len(rules) == 1
    assert rules[0].matcher == ExactMatcher(name="fbclid")


def test_parse_line_without_separator() -> None:
    assert parse_filter_list("removeparam") == ()


def test_parse_with_other_options() -> None:
    rules = parse_filter_list("||example.com^$third-party,removeparam=click_id")
    assert len(rules) == 1
    assert rules[0].matcher == ExactMatcher(name="click_id")


def test_parse_multiple_rules_in_order() -> None:
    text = (
        "! Tracking params\n"
        "||example.com^$removeparam=fbclid\n"
        "||example.com^$removeparam=gclid\n"
        "\n"
        "! Exception\n"
        "@@||safe.com^$removeparam=fbclid\n"
    )
    rules = parse_filter_list(text)
    assert [rule.is_exception for rule in rules] == [False, False, True]
    assert rules[1].matcher == ExactMatcher(name="gclid")


def test_parse_trims_whitespace_and_crlf() -> None:
    rules = parse_filter_list("   ||example.com^$removeparam=fbclid  \r\n")
    assert len(rules) == 1
    assert rules[0].domains == ("example.com",)


def test_find_options_separator_skips_regex_anchor() -> None:
    text = "/^foo$/$removeparam=x"
    assert find_options_separator(text) == 7


def test_find_options_separator_missing() -> None:
    assert find_options_separator("||example.com^") is None


def test_split_options_keeps_commas_inside_regex() -> None:
    tokens = split_options("removeparam=/^(a|b){1,3}$/, domain=example.com ,,")
    assert tokens == ["removeparam=/^(a|b){1,3}$/", "domain=example.com"]


def test_regex_value_keeps_comma_when_parsed() -> None:
    rules = parse_filter_list("*$removeparam=/^x{1,2}$/,domain=example.com")
    assert len(rules) == 1
    matcher = rules[0].matcher
    assert isinstance(matcher, RegexMatcher)
    assert matcher.pattern.pattern == "^x{1,2}$"
    assert rules[0].domains == ("example.com",)


def test_compile_matcher_exact() -> None:
    assert compile_matcher("fbclid") == ExactMatcher(name="fbclid")


def test_compile_matcher_regex_without_trailing_slash() -> None:
    matcher = compile_matcher("/^ref_")
    assert isinstance(matcher, RegexMatcher)
    assert matcher.pattern.pattern == "^ref_"


def test_compile_matcher_invalid_regex() -> None:
    assert compile_matcher("/[abc/") is None
