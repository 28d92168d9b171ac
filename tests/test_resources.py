import pytest

from liman.resources import (
    Resource,
    ResourceError,
    ResourceFile,
    ResourceLoader,
    ResCache,
    XmlResourceExtraData,
    XmlResourceLoader,
    create_xml_resource_loader,
    file_exists,
    load_and_return_root_xml_element,
)


class MemoryFile(ResourceFile):
    def __init__(self, entries):
        self.entries = {name.lower(): data for name, data in entries.items()}

    def open(self):
        return True

    def raw_resource_size(self, resource):
        data = self.entries.get(resource.name)
        return -1 if data is None else len(data)

    def raw_resource(self, resource):
        return self.entries.get(resource.name, b"")

    def num_resources(self):
        return len(self.entries)

    def resource_name(self, num):
        return list(self.entries)[num]


class RawLoader(ResourceLoader):
    def __init__(self, null_zero=False):
        self.null_zero = null_zero

    def pattern(self):
        return "*"

    def use_raw_file(self):
        return True

    def discard_raw_buffer_after_load(self):
        return True

    def add_null_zero(self):
        return self.null_zero

    def loaded_resource_size(self, raw_buffer):
        return len(raw_buffer)

    def load_resource(self, raw_buffer, handle):
        return True


WORLD = b"<World><Actor resource='a.xml'/></World>"


def xml_cache(entries=None):
    cache = ResCache(1, MemoryFile(entries if entries is not None else {"Level.xml": WORLD}))
    cache.register_loader(create_xml_resource_loader())
    return cache


def test_resource_name_is_lowercased():
    assert Resource("Levels/World.XML").name == "levels/world.xml"
    assert Resource("A.xml") == Resource("a.XML")


def test_file_exists(tmp_path):
    present = tmp_path / "present.txt"
    present.write_text("x")
    assert file_exists(present) is True
    assert file_exists(tmp_path / "absent.txt") is False


def test_get_path_prefixes_assets_and_appends_slash():
    cache = ResCache(1)
    cache.set_path("Assets", "assets")
    cache.set_path("Levels", "levels/")
    assert cache.get_path("Levels") == "assets/levels/"


def test_set_path_keeps_first_and_ignores_empty():
    cache = ResCache(1)
    cache.set_path("Assets", "root")
    cache.set_path("Models", "first")
    cache.set_path("Models", "second")
    cache.set_path("Empty", "")
    assert cache.get_path("Models") == "root/first/"
    with pytest.raises(ResourceError):
        cache.get_path("Empty")


def test_get_path_unknown_raises():
    cache = ResCache(1)
    cache.set_path("Assets", "assets")
    with pytest.raises(ResourceError):
        cache.get_path("Textures")


def test_get_path_without_assets_raises():
    cache = ResCache(1)
    cache.set_path("Textures", "tex")
    with pytest.raises(ResourceError):
        cache.get_path("Textures")


@pytest.mark.parametrize(
    "configuration, expected",
    [("release", "rel/shaders/"), ("debug", "dbg/shaders/")],
)
def test_load_paths(tmp_path, configuration, expected):
    paths = tmp_path / "Paths.xml"
    paths.write_text(
        "<Paths>"
        "<Path name='Assets' release='rel' debug='dbg'/>"
        "<Path name='Shaders' release='shaders' debug='shaders'/>"
        "</Paths>"
    )
    cache = ResCache(1)
    cache.load_paths(paths, configuration)
    assert cache.get_path("Shaders") == expected


def test_load_paths_missing_file_raises(tmp_path):
    with pytest.raises(ResourceError):
        ResCache(1).load_paths(tmp_path / "missing.xml")


def test_load_paths_wrong_root_raises(tmp_path):
    paths = tmp_path / "Paths.xml"
    paths.write_text("<Other/>")
    with pytest.raises(ResourceError):
        ResCache(1).load_paths(paths)


def test_xml_handle_is_parsed_and_cached():
    cache = xml_cache()
    handle = cache.get_handle(Resource("LEVEL.xml"))
    assert isinstance(handle.extra, XmlResourceExtraData)
    assert handle.extra.root.tag == "World"
    assert handle.name == "level.xml"
    assert cache.get_handle(Resource("level.xml")) is handle


def test_load_and_return_root_xml_element():
    root = load_and_return_root_xml_element(xml_cache(), "Level.xml")
    assert root.find("Actor").get("resource") == "a.xml"


def test_no_matching_loader_raises():
    cache = xml_cache({"image.png": b"data"})
    with pytest.raises(ResourceError):
        cache.get_handle(Resource("image.png"))


def test_missing_resource_raises():
    with pytest.raises(ResourceError):
        xml_cache().get_handle(Resource("other.xml"))


def test_invalid_xml_raises_and_returns_memory():
    cache = xml_cache({"bad.xml": b"<World>"})
    with pytest.raises(ResourceError):
        cache.get_handle(Resource("bad.xml"))
    assert cache.allocated == 0


def test_raw_loader_with_null_zero():
    data = b"hello"
    cache = ResCache(1, MemoryFile({"note.txt": data}))
    cache.register_loader(RawLoader(null_zero=True))
    handle = cache.get_handle(Resource("note.txt"))
    assert bytes(handle.buffer) == data + b"\0"
    assert handle.size == len(data)
    assert cache.allocated == len(data) + 1


def test_release_returns_memory_once():
    data = b"payload"
    cache = ResCache(1, MemoryFile({"p.bin": data}))
    cache.register_loader(RawLoader())
    handle = cache.get_handle(Resource("p.bin"))
    assert cache.allocated == len(data)
    handle.release()
    handle.release()
    assert cache.allocated == 0
    assert handle.buffer is None


def test_latest_registered_loader_is_tried_first():
    cache = xml_cache()
    cache.register_loader(RawLoader())
    handle = cache.get_handle(Resource("level.xml"))
    assert handle.extra is None
    assert bytes(handle.buffer) == WORLD


def test_make_room_limits():
    cache = ResCache(1)
    assert cache.make_room(cache.cache_size + 1) is False
    assert cache.make_room(cache.cache_size) is True


def test_allocate_counts_and_raises_when_full():
    cache = ResCache(1)
    buffer = cache.allocate(1000)
    assert len(buffer) == 1000
    assert cache.allocated == 1000
    with pytest.raises(ResourceError):
        cache.allocate(cache.cache_size)
    cache.memory_has_been_freed(1000)
    assert cache.allocated == 0


def test_failed_allocation_evicts_cached_handles():
    blob = b"x" * 500_000
    cache = ResCache(1, MemoryFile({"a": blob, "b": blob}))
    cache.register_loader(RawLoader())
    first = cache.get_handle(Resource("a"))
    second = cache.get_handle(Resource("b"))
    with pytest.raises(ResourceError):
        cache.allocate(200_000)
    first.release()
    second.release()
    assert cache.allocated == 0
    assert cache.get_handle(Resource("a")) is not first


def test_flush_forgets_handles():
    cache = xml_cache()
    handle = cache.get_handle(Resource("level.xml"))
    cache.flush()
    assert cache.get_handle(Resource("level.xml")) is not handle


def test_xml_loader_properties():
    loader = create_xml_resource_loader()
    assert isinstance(loader, XmlResourceLoader)
    assert loader.pattern() == "*.xml"
    assert loader.use_raw_file() is False
    assert loader.discard_raw_buffer_after_load() is True
    assert loader.add_null_zero() is False


def test_xml_loader_rejects_empty_buffer():
    cache = ResCache(1)
    from liman.resources import ResHandle

    handle = ResHandle(Resource("e.xml"), bytearray(), 0, cache)
    assert XmlResourceLoader().load_resource(b"", handle) is False
    assert handle.extra is None


def test_xml_extra_data_parse_and_str():
    extra = XmlResourceExtraData()
    extra.parse_xml(b"<Root/>\0trailing")
    assert extra.root.tag == "Root"
    assert str(extra) == "XmlResourceExtraData"