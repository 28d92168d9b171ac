"""Resource cache with least-recently-used eviction, loaders and asset paths."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections import OrderedDict

from liman import log
from liman.strings import wildcard_match


class ResourceError(Exception):
    """Raised when a resource or a resource path cannot be provided."""


def file_exists(path) -> bool:
    """Return True if ``path`` can be opened for reading."""
    try:
        with open(path, "r"):
            return True
    except OSError:
        return False


class Resource:
    """Identifies a resource by its lower-cased name."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Resource({self.name!r})"


class ResourceExtraData(ABC):
    """Data a loader attaches to a handle after processing its bytes."""

    @abstractmethod
    def __str__(self) -> str:
        ...


class XmlResourceExtraData(ResourceExtraData):
    """Parsed XML document of a loaded resource."""

    def __init__(self) -> None:
        self._root: ET.Element | None = None

    def parse_xml(self, raw_buffer) -> None:
        """Parse the buffer up to its first NUL byte as XML."""
        data = bytes(raw_buffer).split(b"\0", 1)[0]
        try:
            self._root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise ResourceError(f"Invalid XML resource: {exc}") from exc

    @property
    def root(self) -> ET.Element | None:
        return self._root

    def __str__(self) -> str:
        return "XmlResourceExtraData"


class ResourceLoader(ABC):
    """Turns the raw bytes of matching resources into loaded data."""

    @abstractmethod
    def pattern(self) -> str:
        """Wildcard pattern of the resource names this loader handles."""

    @abstractmethod
    def use_raw_file(self) -> bool:
        """True if the raw bytes are kept as the loaded resource."""

    @abstractmethod
    def discard_raw_buffer_after_load(self) -> bool:
        ...

    def add_null_zero(self) -> bool:
        """True if the raw buffer needs a trailing NUL byte."""
        return False

    @abstractmethod
    def loaded_resource_size(self, raw_buffer) -> int:
        ...

    @abstractmethod
    def load_resource(self, raw_buffer, handle: ResHandle) -> bool:
        ...


class XmlResourceLoader(ResourceLoader):
    """Loads ``*.xml`` resources into :class:`XmlResourceExtraData`."""

    def pattern(self) -> str:
        return "*.xml"

    def use_raw_file(self) -> bool:
        return False

    def discard_raw_buffer_after_load(self) -> bool:
        return True

    def loaded_resource_size(self, raw_buffer) -> int:
        return len(raw_buffer)

    def load_resource(self, raw_buffer, handle: ResHandle) -> bool:
        if len(raw_buffer) <= 0:
            return False
        extra = XmlResourceExtraData()
        extra.parse_xml(raw_buffer)
        handle.extra = extra
        return True


def create_xml_resource_loader() -> XmlResourceLoader:
    return XmlResourceLoader()


class ResourceFile(ABC):
    """A container of raw resources, such as an archive."""

    @abstractmethod
    def open(self) -> bool:
        ...

    @abstractmethod
    def raw_resource_size(self, resource: Resource) -> int:
        """Size in bytes of the resource, or a negative number if absent."""

    @abstractmethod
    def raw_resource(self, resource: Resource) -> bytes:
        ...

    @abstractmethod
    def num_resources(self) -> int:
        ...

    @abstractmethod
    def resource_name(self, num: int) -> str:
        ...


class ResHandle:
    """A loaded resource whose memory is accounted by its cache."""

    def __init__(self, resource: Resource, buffer, size: int, cache: ResCache) -> None:
        self.resource = resource
        self.buffer = buffer
        self.size = size
        self.extra: ResourceExtraData | None = None
        self._cache = cache

    @property
    def name(self) -> str:
        return self.resource.name

    def release(self) -> None:
        """Drop the buffer and return its memory to the cache; idempotent."""
        if self.buffer is None:
            return
        self.buffer = None
        self._cache.memory_has_been_freed(self.size)


class ResCache:
    """Caches resource handles up to a memory budget, evicting the least used."""

    def __init__(self, size_in_mb: int, resource_file: ResourceFile | None = None) -> None:
        self.cache_size = size_in_mb * 1024 * 1024
        self.allocated = 0
        self.resource_file = resource_file
        self._paths: dict[str, str] = {}
        # Least recently used first, most recently used last.
        self._resources: OrderedDict[str, ResHandle] = OrderedDict()
        self._loaders: list[ResourceLoader] = []

    def register_loader(self, loader: ResourceLoader) -> None:
        """Add a loader; later registrations are tried first."""
        self._loaders.insert(0, loader)

    def get_handle(self, resource: Resource | str) -> ResHandle:
        """Return the cached handle for ``resource``, loading it if needed."""
        if isinstance(resource, str):
            resource = Resource(resource)
        handle = self._resources.get(resource.name)
        if handle is None:
            return self._load(resource)
        self._resources.move_to_end(resource.name)
        return handle

    def _load(self, resource: Resource) -> ResHandle:
        loader = next(
            (ld for ld in self._loaders if wildcard_match(ld.pattern(), resource.name)),
            None,
        )
        if loader is None:
            raise ResourceError(f"No loader for resource {resource.name}")
        if self.resource_file is None:
            raise ResourceError("No resource file is attached to the cache")

        raw_size = self.resource_file.raw_resource_size(resource)
        if raw_size < 0:
            raise ResourceError(f"Resource {resource.name} was not found")

        alloc_size = raw_size + (1 if loader.add_null_zero() else 0)
        use_raw = loader.use_raw_file()
        raw_buffer = self.allocate(alloc_size) if use_raw else bytearray(alloc_size)

        data = self.resource_file.raw_resource(resource)
        if not data:
            if use_raw:
                self.memory_has_been_freed(alloc_size)
            raise ResourceError(f"Resource {resource.name} could not be read")
        chunk = bytes(data[:raw_size])
        raw_buffer[: len(chunk)] = chunk

        if use_raw:
            handle = ResHandle(resource, raw_buffer, raw_size, self)
        else:
            raw = bytes(raw_buffer)
            size = loader.loaded_resource_size(raw)
            handle = ResHandle(resource, self.allocate(size), size, self)
            try:
                success = loader.load_resource(raw, handle)
            except ResourceError:
                handle.release()
                raise
            if not success:
                handle.release()
                raise ResourceError(f"Resource {resource.name} failed to load")

        self._resources[resource.name] = handle
        self._resources.move_to_end(resource.name)
        return handle

    def load_paths(self, paths_file_name, configuration: str = "release") -> None:
        """Read asset paths from a ``<Paths>`` XML file for a build configuration."""
        log.write_log("Info", "Loading paths")
        try:
            root = ET.parse(paths_file_name).getroot()
        except (OSError, ET.ParseError) as exc:
            log.write_log("File system", f"File {paths_file_name} was not found")
            raise ResourceError(f"File {paths_file_name} was not found") from exc
        if root.tag != "Paths":
            raise ResourceError(f"File {paths_file_name} has no Paths element")

        children = list(root)
        first = next((i for i, node in enumerate(children) if node.tag == "Path"), None)
        if first is None:
            return
        for node in children[first:]:
            name = node.get("name")
            path = node.get(configuration)
            if name is None or path is None:
                raise ResourceError(f"Path entry lacks name or {configuration} attribute")
            print(f"{name} -- {path}")
            self.set_path(name, path)

    def set_path(self, kind: str, path: str) -> None:
        """Register a directory for ``kind``; the first registration wins."""
        if not path:
            return
        if not path.endswith("/"):
            path += "/"
        self._paths.setdefault(kind, path)

    def get_path(self, kind: str) -> str:
        """Directory registered for ``kind``, prefixed by the Assets path."""
        path = self._paths.get(kind)
        if path is None:
            log.write_log("ResCache", f"Path {kind} was not found")
            raise ResourceError(f"Path {kind} was not found")
        assets = self._paths.get("Assets")
        if assets is None:
            raise ResourceError("Path Assets was not found")
        return assets + path

    def flush(self) -> None:
        """Forget every cached handle."""
        while self._resources:
            self.free(next(iter(self._resources.values())))

    def make_room(self, size: int) -> bool:
        """Evict least recently used handles until ``size`` bytes fit."""
        if size > self.cache_size:
            return False
        while size > self.cache_size - self.allocated:
            if not self._resources:
                return False
            self._free_one_resource()
        return True

    def allocate(self, size: int) -> bytearray:
        if not self.make_room(size):
            raise ResourceError(f"Resource cache cannot hold {size} more bytes")
        self.allocated += size
        return bytearray(size)

    def free(self, handle: ResHandle) -> None:
        """Remove a handle from the cache.

        Its memory is counted as freed only once the handle is released.
        """
        self._resources.pop(handle.name, None)

    def _free_one_resource(self) -> None:
        self._resources.popitem(last=False)

    def memory_has_been_freed(self, size: int) -> None:
        self.allocated -= size


def load_and_return_root_xml_element(cache: ResCache, resource_name: str):
    """Load an XML resource through ``cache`` and return its root element."""
    handle = cache.get_handle(Resource(resource_name))
    if not isinstance(handle.extra, XmlResourceExtraData):
        raise ResourceError(f"Resource {resource_name} is not an XML resource")
    return handle.extra.root