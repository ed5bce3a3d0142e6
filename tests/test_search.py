"""Tests for card search and highlighting."""

import copy

from cardsieve.filtering.search import (
    get_cards_matching_query,
    highlight_card,
    highlight_cards,
    search_cards,
)

SEARCH_FIELDS = ["contentArea.title", "contentArea.description"]


def _ids(cards: list[dict]) -> list[str]:
    return [card["id"] for card in cards]


class TestSearchCards:
    def test_empty_query_is_identity(self, sample_cards: list[dict]) -> None:
        assert search_cards("", sample_cards, SEARCH_FIELDS) is sample_cards
        assert search_cards(None, sample_cards, SEARCH_FIELDS) is sample_cards

    def test_matches_any_field(self, sample_cards: list[dict]) -> None:
        result = search_cards("secur", sample_cards, SEARCH_FIELDS)

        # card-1 by title, card-3 by description
        assert _ids(result) == ["card-1", "card-3"]

    def test_query_is_sanitized(self, sample_cards: list[dict]) -> None:
        result = search_cards("  PhotoShop  ", sample_cards, SEARCH_FIELDS)

        assert _ids(result) == ["card-2", "card-3"]

    def test_whitespace_runs_collapse(self, sample_cards: list[dict]) -> None:
        result = search_cards("layer    basics", sample_cards, SEARCH_FIELDS)

        assert _ids(result) == ["card-2"]

    def test_card_matching_two_fields_appears_once(self, sample_cards: list[dict]) -> None:
        # "layer" is in both the title and the description of card-2
        result = search_cards("layer", sample_cards, SEARCH_FIELDS)

        assert _ids(result) == ["card-2"]

    def test_missing_field_never_matches(self, sample_cards: list[dict]) -> None:
        result = search_cards("anything", sample_cards, ["contentArea.subtitle"])

        assert result == []

    def test_no_search_fields_no_matches(self, sample_cards: list[dict]) -> None:
        assert search_cards("secur", sample_cards, []) == []

    def test_non_string_field_values_are_stringified(self) -> None:
        cards = [{"id": "a", "stats": {"views": 1200}}, {"id": "b", "stats": {"views": 7}}]

        assert _ids(search_cards("120", cards, ["stats.views"])) == ["a"]

    def test_does_not_modify_cards(self, sample_cards: list[dict]) -> None:
        before = copy.deepcopy(sample_cards)

        search_cards("secur", sample_cards, SEARCH_FIELDS)

        assert sample_cards == before


class TestGetCardsMatchingQuery:
    def test_expects_sanitized_query(self, sample_cards: list[dict]) -> None:
        assert get_cards_matching_query(sample_cards, SEARCH_FIELDS, "LAYER") == []
        assert _ids(get_cards_matching_query(sample_cards, SEARCH_FIELDS, "layer")) == ["card-2"]

    def test_duplicate_ids_keep_first(self) -> None:
        cards = [
            {"id": "x", "contentArea": {"title": "first copy"}},
            {"id": "x", "contentArea": {"title": "second copy"}},
        ]

        result = get_cards_matching_query(cards, ["contentArea.title"], "copy")

        assert result == [cards[0]]


class TestHighlightCard:
    def test_wraps_matches_in_a_copy(self, sample_cards: list[dict]) -> None:
        card = sample_cards[1]

        highlighted = highlight_card(card, "contentArea.title", "layer", css_class="hit")

        assert highlighted["contentArea"]["title"] == '<span class="hit">Layer</span> basics'
        assert card["contentArea"]["title"] == "Layer basics"
        assert highlighted["contentArea"]["description"] == card["contentArea"]["description"]

    def test_every_occurrence_is_wrapped(self) -> None:
        card = {"id": "a", "contentArea": {"title": "Go go GO"}}

        highlighted = highlight_card(card, "contentArea.title", "go", css_class="m")

        assert highlighted["contentArea"]["title"] == (
            '<span class="m">Go</span> <span class="m">go</span> <span class="m">GO</span>'
        )

    def test_list_path_keeps_other_tags(self) -> None:
        card = {"id": "a", "tags": [{"id": "caas:topic/security"}, {"id": "caas:product/acrobat"}]}

        assert search_cards("security", [card], ["tags.0.id"]) == [card]

        highlighted = highlight_card(card, "tags.0.id", "security", css_class="m")

        assert highlighted["tags"] == [
            {"id": 'caas:topic/<span class="m">security</span>'},
            {"id": "caas:product/acrobat"},
        ]
        assert card["tags"][0]["id"] == "caas:topic/security"

    def test_missing_field_returns_card(self, sample_cards: list[dict]) -> None:
        card = sample_cards[0]

        assert highlight_card(card, "contentArea.subtitle", "secur") is card

    def test_empty_field_returns_card(self) -> None:
        card = {"id": "a", "contentArea": {"title": ""}}

        assert highlight_card(card, "contentArea.title", "x") is card

    def test_default_css_class_from_settings(self, sample_cards: list[dict]) -> None:
        highlighted = highlight_card(sample_cards[1], "contentArea.title", "layer")

        assert 'class="cardsieve-SearchResult"' in highlighted["contentArea"]["title"]

    def test_highlight_cards_applies_every_field(self, sample_cards: list[dict]) -> None:
        result = highlight_cards([sample_cards[1]], SEARCH_FIELDS, "layer", css_class="m")

        assert result[0]["contentArea"]["title"].startswith('<span class="m">Layer</span>')
        assert '<span class="m">layer</span>s' in result[0]["contentArea"]["description"]
        assert sample_cards[1]["contentArea"]["description"] == (
            "Getting started with Photoshop layers."
        )
