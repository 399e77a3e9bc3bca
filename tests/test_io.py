from linequeue.io import body_to_lines, to_index, to_line, to_lines
from linequeue.model import TopicCount


def test_io_body_to_lines():
    assert body_to_lines(None) == []
    assert body_to_lines(b"") == []
    assert body_to_lines(b"a\n\n\nb\na\n") == ["a", "b", "a"]
    assert body_to_lines("\nx") == ["x"]
    assert body_to_lines("ü\n".encode()) == ["ü"]


def test_io_render():
    assert to_line(None) == ""
    assert to_line(3) == "3\n"
    assert to_line("a") == "a\n"
    assert to_lines([]) == ""
    assert to_lines(None) == ""
    assert to_lines(["a", "b"]) == "a\nb\n"
    counts = [TopicCount(topic="bar", count=5), TopicCount(topic="foo", count=3)]
    assert to_index(counts) == "bar 5\nfoo 3\n"
    assert to_index([]) == ""


def test_io_body_invalid_utf8():
    lines = body_to_lines(b"a\n\xff\xfeb\n")
    assert lines == ["a", "\ufffd\ufffdb"]
