from concurrent.futures import ThreadPoolExecutor

from linequeue.storage import AtomicReference, TopicDirectory


def test_storage_atomic_reference():
    first, second = {}, {}
    ref = AtomicReference(first)
    assert ref.get() is first
    assert not ref.compare_and_set(second, {})
    assert ref.compare_and_set(first, second)
    assert ref.get() is second


def test_storage_directory_get_or_create():
    directory = TopicDirectory()
    assert directory.get_if_present("foo") is None
    queue = directory.get_or_create("foo")
    assert directory.get_or_create("foo") is queue
    assert directory.get_if_present("foo") is queue
    assert directory.topics() == ["foo"]

    # topics are case sensitive
    assert directory.get_or_create("Foo") is not queue
    assert len(directory) == 2


def test_storage_directory_replace():
    directory = TopicDirectory()
    old = directory.get_or_create("foo")
    old.add("z")
    assert directory.replace("foo", ["a", "b", "a"]) == 2
    new = directory.get_if_present("foo")
    assert new is not old
    assert new.snapshot() == ("a", "b")
    # the detached queue is untouched
    assert old.snapshot() == ("z",)

    assert directory.replace("foo", ["a", "b"]) == 2
    assert directory.get_if_present("foo").snapshot() == ("a", "b")
    assert directory.replace("empty", []) == 0
    assert "empty" in directory.topics()


def test_storage_directory_remove():
    directory = TopicDirectory()
    assert directory.remove("foo") is None
    queue = directory.get_or_create("foo")
    queue.add("a")
    assert directory.remove("foo") is queue
    assert directory.get_if_present("foo") is None
    assert directory.remove("foo") is None


def test_storage_directory_clear_all():
    directory = TopicDirectory()
    assert directory.clear_all() == 0
    directory.replace("foo", ["a", "b"])
    directory.replace("bar", ["c", "d", "e"])
    directory.get_or_create("empty")
    assert directory.clear_all() == 5
    assert len(directory) == 0
    assert directory.list_non_empty() == []


def test_storage_directory_list_non_empty():
    directory = TopicDirectory()
    directory.replace("foo", ["a", "b", "c"])
    directory.replace("bar", ["a"])
    directory.get_or_create("baz")
    counts = directory.list_non_empty()
    assert [(c.topic, c.count) for c in counts] == [("bar", 1), ("foo", 3)]
    # empty topics linger but are hidden
    assert sorted(directory.topics()) == ["bar", "baz", "foo"]


def test_storage_directory_concurrent_create():
    directory = TopicDirectory()

    def create(i: int):
        return directory.get_or_create(f"topic-{i % 10}")

    with ThreadPoolExecutor(16) as pool:
        queues = list(pool.map(create, range(1000)))

    assert len(directory) == 10
    for i, queue in enumerate(queues):
        assert directory.get_if_present(f"topic-{i % 10}") is queue
