import pytest

from tsbind.naming import DeriveError, Inflection, raw_name_to_ts_field, to_ts_ident


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("r#enum", "enum"),
        ("r#type", "type"),
        ("r#use", "use"),
        ("r#struct", "struct"),
        ("r#let", "let"),
        ("plain", "plain"),
    ],
)
def test_to_ts_ident_strips_raw_prefix(raw, expected):
    assert to_ts_ident(raw) == expected


def test_rename_all_uppercase():
    assert Inflection.UPPER.apply("a") == "A"
    assert Inflection.UPPER.apply("b") == "B"


def test_special_char_field_is_quoted():
    assert raw_name_to_ts_field("a/b") == '"a/b"'


@pytest.mark.parametrize(
    "name, expected",
    [
        ("foo", "foo"),
        ("_bar", "_bar"),
        ("$el", "$el"),
        ("", ""),
        ("1abc", '"1abc"'),
        ("kebab-cased-tag", '"kebab-cased-tag"'),
        ("whitespace in content", '"whitespace in content"'),
    ],
)
def test_raw_name_to_ts_field(name, expected):
    assert raw_name_to_ts_field(name) == expected


@pytest.mark.parametrize(
    "inflection, source, expected",
    [
        (Inflection.SCREAMING_SNAKE, "MessageOne", "MESSAGE_ONE"),
        (Inflection.SCREAMING_SNAKE, "MessageTwo", "MESSAGE_TWO"),
        (Inflection.CAMEL, "sender_id", "senderId"),
        (Inflection.CAMEL, "number_of_camels", "numberOfCamels"),
        (Inflection.KEBAB, "VariantName", "variant-name"),
        (Inflection.LOWER, "B", "b"),
        (Inflection.SNAKE, "MessageOne", "message_one"),
        (Inflection.PASCAL, "sender_id", "SenderId"),
    ],
)
def test_inflection_apply(inflection, source, expected):
    assert inflection.apply(source) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("lowercase", Inflection.LOWER),
        ("UPPERCASE", Inflection.UPPER),
        ("camelCase", Inflection.CAMEL),
        ("snake_case", Inflection.SNAKE),
        ("PascalCase", Inflection.PASCAL),
        ("SCREAMING_SNAKE_CASE", Inflection.SCREAMING_SNAKE),
        ("kebab-case", Inflection.KEBAB),
    ],
)
def test_inflection_parse(text, expected):
    assert Inflection.parse(text) is expected


def test_inflection_parse_invalid():
    with pytest.raises(DeriveError, match="invalid inflection: 'Title Case'"):
        Inflection.parse("Title Case")


def test_snake_round_trip_through_camel():
    assert Inflection.SNAKE.apply(Inflection.CAMEL.apply("number_of_snakes")) == "number_of_snakes"