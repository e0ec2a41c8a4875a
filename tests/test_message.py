import pytest

from bocchi.message import (
    At,
    CustomMusic,
    Dice,
    Image,
    MessageSegment,
    Music,
    Node,
    Reply,
    Text,
    content_from_json,
    content_to_json,
)


def test_text_wire_form():
    assert Text(text="hi").to_dict() == {"type": "text", "data": {"text": "hi"}}


def test_unit_segment_has_no_data():
    assert Dice().to_dict() == {"type": "dice"}
    assert MessageSegment.from_dict({"type": "dice"}) == Dice()


def test_optional_none_fields_are_omitted():
    image = Image(file="a.jpg", cache=True)
    assert image.to_dict() == {"type": "image", "data": {"file": "a.jpg", "cache": True}}


@pytest.mark.parametrize(
    "segment",
    [
        Text(text="hello"),
        At(qq="all"),
        Reply(id="42"),
        Image(file="x.png", url="u", timeout=10),
        Music(type="qq", id="1"),
        CustomMusic(type="custom", url="u", audio="a", title="t"),
        Node(content=[Text(text="inner")]),
        Node(nickname="n", content="plain"),
    ],
)
def test_round_trip(segment):
    assert MessageSegment.from_dict(segment.to_dict()) == segment


def test_content_round_trip():
    content = [Reply(id="1"), Text(text="x")]
    assert content_from_json(content_to_json(content)) == content
    assert content_from_json(content_to_json("raw")) == "raw"


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        MessageSegment.from_dict({"type": "nope", "data": {}})


def test_missing_required_field_rejected():
    with pytest.raises(ValueError):
        MessageSegment.from_dict({"type": "text", "data": {}})


def test_bad_content_rejected():
    with pytest.raises(ValueError):
        content_from_json(5)