"""
Phrase dictionary tests
"""
import pytest

from humanize_diff.errors import DictionaryBuildError
from humanize_diff.rewrite.dictionary import MatchSpan, RewriteRule, build_dictionary
from humanize_diff.rewrite.rules import DeterministicRewriter, default_phrase_dictionary


class TestPriorityOrder:
    """Rules are ordered longest pattern first, ties in declaration order"""

    def test_longer_pattern_sorted_first(self):
        dictionary = build_dictionary([("not", "nope"), ("is not", "isn't")])

        assert [rule.pattern for rule in dictionary] == ["is not", "not"]

    def test_ties_keep_declaration_order(self):
        dictionary = build_dictionary([("ab", "one"), ("cd", "two"), ("ef", "six")])

        assert [rule.pattern for rule in dictionary] == ["ab", "cd", "ef"]

    def test_accepts_mappings_and_rule_objects(self):
        dictionary = build_dictionary(
            [
                {"pattern": "utilize", "replacement": "use"},
                RewriteRule("leverage", "lean on"),
            ]
        )

        assert len(dictionary) == 2
        assert dictionary.rejected == ()


class TestFindAllMatches:
    """Single left-to-right scan producing non-overlapping spans"""

    def test_longest_match_wins_at_same_offset(self):
        dictionary = build_dictionary([("is not", "isn't"), ("not", "nope")])

        spans = dictionary.find_all_matches("it is not fine")

        assert spans == [MatchSpan(3, 9, 0)]
        assert dictionary.rule(spans[0].rule_id).replacement == "isn't"

    def test_longest_match_rewrite(self):
        rewriter = DeterministicRewriter(
            dictionary=build_dictionary([("is not", "isn't"), ("not", "nope")]),
            contractions=build_dictionary([]),
        )

        result = rewriter.rewrite("it is not fine")

        assert result.text == "It isn't fine"
        assert "nope" not in result.text

    def test_spans_do_not_overlap(self):
        dictionary = build_dictionary([("a b", "x"), ("b c", "y")])

        spans = dictionary.find_all_matches("a b c")

        assert spans == [MatchSpan(0, 3, 0)]

    def test_repeated_phrase_matched_each_time(self):
        dictionary = build_dictionary([("do not", "don't")])

        spans = dictionary.find_all_matches("do not do not")

        assert [(span.start, span.end) for span in spans] == [(0, 6), (7, 13)]

    def test_word_boundaries(self):
        dictionary = build_dictionary([("demonstrate", "show")])

        assert dictionary.find_all_matches("demonstrates") == []
        assert len(dictionary.find_all_matches("we demonstrate it")) == 1

    def test_case_insensitive_by_default(self):
        dictionary = build_dictionary([("utilize", "use")])

        assert len(dictionary.find_all_matches("UTILIZE Utilize utilize")) == 3

    def test_case_sensitive_rule(self):
        dictionary = build_dictionary([("I am", "I'm", True)])

        assert dictionary.find_all_matches("i am here") == []
        assert len(dictionary.find_all_matches("I am here")) == 1

    def test_whitespace_and_apostrophe_variants(self):
        dictionary = build_dictionary([("don't know", "dunno")])

        assert len(dictionary.find_all_matches("I don’t\n  know")) == 1
        assert len(dictionary.find_all_matches("I don't know")) == 1

    def test_built_in_apostrophe_rules(self):
        dictionary = default_phrase_dictionary()

        for text in ("in today's world", "In today’s society"):
            (span,) = dictionary.find_all_matches(text)
            assert (span.start, span.end) == (0, len(text))

    def test_regex_rule(self):
        dictionary = build_dictionary([(r"\bfurthermore\b,?\s*", "plus, ", False, True)])

        spans = dictionary.find_all_matches("Furthermore, it works.")

        assert spans == [MatchSpan(0, 13, 0)]

    def test_empty_text(self):
        dictionary = build_dictionary([("utilize", "use")])

        assert dictionary.find_all_matches("") == []


class TestRejectedRules:
    """Malformed rules are skipped and recorded, never raised"""

    def test_bad_rules_are_rejected(self):
        dictionary = build_dictionary(
            [
                ("", "nothing"),
                ("(unclosed", "x", False, True),
                ("alpha", "one"),
                ("ALPHA", "two"),
                ("beta", "alpha beta"),
                42,
            ]
        )

        assert [rule.pattern for rule in dictionary] == ["alpha"]
        assert len(dictionary.rejected) == 5
        assert all(isinstance(error, DictionaryBuildError) for error in dictionary.rejected)

    def test_reasons_are_reported(self):
        dictionary = build_dictionary([("beta", "alpha beta"), ("alpha", "one")])

        (error,) = dictionary.rejected
        assert error.rule.pattern == "beta"
        assert "matched by the dictionary" in str(error)

    def test_mapping_without_replacement(self):
        dictionary = build_dictionary([{"pattern": "utilize"}])

        assert len(dictionary) == 0
        assert len(dictionary.rejected) == 1

    def test_build_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            raise DictionaryBuildError("bad rule")
