"""Send-option builders: stored values, clamping, validation, immutability."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from elastic_email_adapter.domain import options
from elastic_email_adapter.domain.enums import ALL_SEGMENTS, CharsetPart, EncodingType
from elastic_email_adapter.domain.errors import InvalidSendOptionError
from elastic_email_adapter.domain.message import Email
from elastic_email_adapter.domain.send_options import SendOptions


def _opts(email: Email) -> SendOptions:
    return email.private["elastic_send_options"]


# ---------------------------------------------------------------------------
# Simple string options
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("builder", "field_name", "value"),
    [
        (options.data_source, "data_source", "recipients.csv"),
        (options.merge_source_filename, "merge_source_filename", "merge.csv"),
        (options.pool_name, "pool_name", "test"),
        (options.post_back, "post_back", "12345"),
        (options.template, "template", "welcome-template"),
    ],
)
def test_string_builders_store_value(
    email_factory: Callable[..., Email],
    builder: Callable[[Email, str], Email],
    field_name: str,
    value: str,
) -> None:
    """Each simple builder stores its value under its own option name."""
    email = builder(email_factory(), value)

    assert getattr(_opts(email), field_name) == value


@pytest.mark.os_agnostic
def test_channel_shorter_than_limit_is_kept(email_factory: Callable[..., Email]) -> None:
    """Short channel names are untouched."""
    assert _opts(options.channel(email_factory(), "transactional")).channel == "transactional"


@pytest.mark.os_agnostic
def test_channel_is_truncated_to_191_characters(email_factory: Callable[..., Email]) -> None:
    """Longer channel names keep their first 191 characters."""
    name = "a" * 150 + "b" * 100

    stored = _opts(options.channel(email_factory(), name)).channel

    assert stored == name[:191]
    assert len(stored) == options.CHANNEL_MAX_LENGTH


# ---------------------------------------------------------------------------
# attachments / lists / segments
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_attachments_accepts_single_name(email_factory: Callable[..., Email]) -> None:
    """A single name is wrapped in a one-element sequence."""
    assert _opts(options.attachments(email_factory(), "report.pdf")).attachments == ("report.pdf",)


@pytest.mark.os_agnostic
def test_attachments_keeps_order(email_factory: Callable[..., Email]) -> None:
    """Several names keep the caller's order."""
    email = options.attachments(email_factory(), ["b.pdf", "a.pdf"])

    assert _opts(email).attachments == ("b.pdf", "a.pdf")


@pytest.mark.os_agnostic
def test_lists_joins_names_with_semicolons(email_factory: Callable[..., Email]) -> None:
    """Contact lists are stored as one semicolon-separated string."""
    assert _opts(options.lists(email_factory(), ["alpha", "beta"])).lists == "alpha;beta"


@pytest.mark.os_agnostic
def test_lists_single_name(email_factory: Callable[..., Email]) -> None:
    """One list name needs no separator."""
    assert _opts(options.lists(email_factory(), "alpha")).lists == "alpha"


@pytest.mark.os_agnostic
def test_segments_all_segments_sentinel(email_factory: Callable[..., Email]) -> None:
    """The all-segments selector is sent as ``0``."""
    assert _opts(options.segments(email_factory(), ALL_SEGMENTS)).segments == "0"


@pytest.mark.os_agnostic
def test_segments_deduplicates_keeping_first_occurrence(email_factory: Callable[..., Email]) -> None:
    """Repeated segment names appear once, in first-seen order."""
    email = options.segments(email_factory(), ["vip", "new", "vip", ALL_SEGMENTS, "new"])

    assert _opts(email).segments == "vip;new;0"


# ---------------------------------------------------------------------------
# charset / encoding_type
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("part", "field_name"),
    [
        (CharsetPart.AMP, "charset_body_amp"),
        (CharsetPart.HTML, "charset_body_html"),
        (CharsetPart.TEXT, "charset_body_text"),
        ("amp", "charset_body_amp"),
        ("html", "charset_body_html"),
        ("text", "charset_body_text"),
    ],
)
def test_charset_per_part(email_factory: Callable[..., Email], part: CharsetPart | str, field_name: str) -> None:
    """A recognised part sets that part's charset only."""
    stored = _opts(options.charset(email_factory(), "iso-8859-1", part))

    assert getattr(stored, field_name) == "iso-8859-1"
    assert stored.charset is None


@pytest.mark.os_agnostic
@pytest.mark.parametrize("part", [None, "subject", "HTML-ish"])
def test_charset_without_known_part_sets_global(email_factory: Callable[..., Email], part: str | None) -> None:
    """No part, or an unknown one, overrides the message charset."""
    stored = _opts(options.charset(email_factory(), "iso-8859-1", part))

    assert stored.charset == "iso-8859-1"
    assert stored.charset_body_html is None


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("encoding", "code"),
    [
        (EncodingType.NONE, 0),
        (EncodingType.RAW_7BIT, 1),
        (EncodingType.RAW_8BIT, 2),
        (EncodingType.QUOTED_PRINTABLE, 3),
        (EncodingType.BASE64, 4),
        (EncodingType.UUE, 5),
        ("none", 0),
        ("raw_7bit", 1),
        ("raw_8bit", 2),
        ("quoted_printable", 3),
        ("base64", 4),
        ("uue", 5),
    ],
)
def test_encoding_type_codes(email_factory: Callable[..., Email], encoding: EncodingType | str, code: int) -> None:
    """Every known encoding maps to its numeric code."""
    assert _opts(options.encoding_type(email_factory(), encoding)).encoding_type == code


@pytest.mark.os_agnostic
def test_encoding_type_unknown_defaults_to_base64(email_factory: Callable[..., Email]) -> None:
    """Unrecognised encodings fall back to base64."""
    assert _opts(options.encoding_type(email_factory(), "rot13")).encoding_type == 4


@pytest.mark.os_agnostic
@pytest.mark.parametrize("code", [0, 1, 2, 3, 4, 5])
def test_encoding_type_accepts_numeric_codes(email_factory: Callable[..., Email], code: int) -> None:
    """A valid numeric code is stored as given."""
    assert _opts(options.encoding_type(email_factory(), code)).encoding_type == code


@pytest.mark.os_agnostic
@pytest.mark.parametrize("code", [-1, 6, 99])
def test_encoding_type_unknown_numeric_code_defaults_to_base64(email_factory: Callable[..., Email], code: int) -> None:
    """Codes outside 0..5 fall back to base64."""
    assert _opts(options.encoding_type(email_factory(), code)).encoding_type == 4


# ---------------------------------------------------------------------------
# merge
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_merge_mapping_prefixes_keys(email_factory: Callable[..., Email]) -> None:
    """Mapping keys gain the ``merge_`` prefix."""
    email = options.merge(email_factory(), {"first_name": "Chris"})

    assert _opts(email).merge == (("merge_first_name", "Chris"),)


@pytest.mark.os_agnostic
def test_merge_pair_list_keeps_repeated_keys(email_factory: Callable[..., Email]) -> None:
    """Repeated keys in a pair list are all kept, in order."""
    email = options.merge(email_factory(), [("tag", "a"), ("tag", "b")])

    assert _opts(email).merge == (("merge_tag", "a"), ("merge_tag", "b"))


@pytest.mark.os_agnostic
def test_merge_mixed_list_flattens(email_factory: Callable[..., Email]) -> None:
    """A list may mix mappings and pairs."""
    email = options.merge(email_factory(), [{"a": "1"}, ("b", "2"), [("c", "3")]])

    assert _opts(email).merge == (("merge_a", "1"), ("merge_b", "2"), ("merge_c", "3"))


@pytest.mark.os_agnostic
@pytest.mark.parametrize("params", ["first_name", 42, ["first_name"], [(1, "x")]])
def test_merge_rejects_malformed_entries(email_factory: Callable[..., Email], params: object) -> None:
    """Entries that are neither mappings nor pairs fail loudly."""
    with pytest.raises(InvalidSendOptionError, match="merge expects mappings"):
        options.merge(email_factory(), params)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# time_off_set_minutes
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("minutes", "stored"),
    [(-5, 1), (0, 1), (1, 1), (20, 20), (524_160, 524_160), (524_161, 524_160), (10**9, 524_160)],
)
def test_time_off_set_minutes_is_clamped(email_factory: Callable[..., Email], minutes: int, stored: int) -> None:
    """Delays are clamped to between one minute and one year."""
    assert _opts(options.time_off_set_minutes(email_factory(), minutes)).time_off_set_minutes == stored


@pytest.mark.os_agnostic
@pytest.mark.parametrize("minutes", ["20", 2.5, True, None])
def test_time_off_set_minutes_rejects_non_integers(email_factory: Callable[..., Email], minutes: object) -> None:
    """Only real integers are accepted."""
    with pytest.raises(InvalidSendOptionError, match="time_off_set_minutes must be an integer"):
        options.time_off_set_minutes(email_factory(), minutes)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# tracking
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
@pytest.mark.parametrize("enabled", [True, False])
def test_track_flags_store_booleans(email_factory: Callable[..., Email], enabled: bool) -> None:
    """Tracking flags keep their boolean value, including False."""
    email = options.track_opens(options.track_clicks(email_factory(), enabled), enabled)

    assert _opts(email).track_clicks is enabled
    assert _opts(email).track_opens is enabled


@pytest.mark.os_agnostic
@pytest.mark.parametrize("builder", [options.track_clicks, options.track_opens])
@pytest.mark.parametrize("value", ["true", 1, None])
def test_track_flags_reject_non_booleans(
    email_factory: Callable[..., Email],
    builder: Callable[[Email, bool], Email],
    value: object,
) -> None:
    """Truthy stand-ins are not accepted as flags."""
    with pytest.raises(InvalidSendOptionError, match="must be a boolean"):
        builder(email_factory(), value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# utm_parameters
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_utm_parameters_sets_each_field(email_factory: Callable[..., Email]) -> None:
    """All four UTM keys map to their own option."""
    email = options.utm_parameters(
        email_factory(),
        {"campaign": "spring", "content": "hero", "medium": "email", "source": "newsletter"},
    )
    stored = _opts(email)

    assert (stored.utm_campaign, stored.utm_content, stored.utm_medium, stored.utm_source) == (
        "spring",
        "hero",
        "email",
        "newsletter",
    )


@pytest.mark.os_agnostic
def test_utm_parameters_merges_with_earlier_values(email_factory: Callable[..., Email]) -> None:
    """A later call adds to and overrides, without clearing, earlier keys."""
    email = options.utm_parameters(email_factory(), {"campaign": "spring", "source": "ads"})
    email = options.utm_parameters(email, [("source", "newsletter")])

    assert _opts(email) == SendOptions(utm_campaign="spring", utm_source="newsletter")


@pytest.mark.os_agnostic
def test_utm_parameters_rejects_unknown_key(email_factory: Callable[..., Email]) -> None:
    """Keys outside the four UTM names are rejected."""
    with pytest.raises(InvalidSendOptionError, match="unknown UTM parameter: 'term'"):
        options.utm_parameters(email_factory(), {"term": "x"})


# ---------------------------------------------------------------------------
# Composition and immutability
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_builders_accumulate_into_one_bag(email_factory: Callable[..., Email]) -> None:
    """Chained builders keep each other's values."""
    email = options.pool_name(options.post_back(email_factory(), "12345"), "test")

    assert _opts(email) == SendOptions(pool_name="test", post_back="12345")


@pytest.mark.os_agnostic
def test_later_builder_call_overwrites_same_option(email_factory: Callable[..., Email]) -> None:
    """Setting an option twice keeps the last value."""
    email = options.pool_name(options.pool_name(email_factory(), "first"), "second")

    assert _opts(email).pool_name == "second"


@pytest.mark.os_agnostic
def test_builders_do_not_modify_input(email_factory: Callable[..., Email]) -> None:
    """The original email keeps its original bag."""
    original = options.pool_name(email_factory(), "first")

    updated = options.post_back(original, "12345")

    assert _opts(original) == SendOptions(pool_name="first")
    assert _opts(updated) == SendOptions(pool_name="first", post_back="12345")
    assert original is not updated


@pytest.mark.os_agnostic
def test_builders_extend_a_raw_mapping_bag(email_factory: Callable[..., Email]) -> None:
    """A hand-built mapping under the options key is carried forward."""
    email = email_factory(private={"elastic_send_options": {"pool_name": "raw", "bogus": 1}})

    assert _opts(options.post_back(email, "1")) == SendOptions(pool_name="raw", post_back="1")


@pytest.mark.os_agnostic
def test_builders_keep_other_private_entries(email_factory: Callable[..., Email]) -> None:
    """Unrelated extension-bag entries survive."""
    email = email_factory(private={"other_adapter": {"x": 1}})

    assert options.pool_name(email, "p").private["other_adapter"] == {"x": 1}
