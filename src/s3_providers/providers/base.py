"""Provider interfaces the plugin host depends on."""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union

from s3_providers.schemas import DeleteResult, StatResult, UploadResult


class FileSystemProvider(ABC):
    """Base class for virtual filesystem providers."""

    @abstractmethod
    def get_base_directory(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def relative_or_absolute_path_to_absolute_path(self, path: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def relative_or_absolute_path_to_relative_path(self, path: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def write_file(self, path: str, content: Union[str, bytes]) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def append_file(self, path: str, content: Union[str, bytes]) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def read_file(self, path: str, encoding: Optional[str] = "utf-8") -> Union[str, bytes]:
        raise NotImplementedError

    @abstractmethod
    async def delete_file(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def stat(self, path: str) -> StatResult:
        raise NotImplementedError

    @abstractmethod
    async def copy(self, source_path: str, destination_path: str, overwrite: bool = False) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def rename(self, old_path: str, new_path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def create_directory(self, path: str, recursive: bool = False) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_directory_tree(
        self,
        path: str,
        recursive: bool = True,
        ignore_filter: Optional[Callable[[str], bool]] = None,
    ) -> AsyncIterator[str]:
        raise NotImplementedError

    @abstractmethod
    async def chmod(self, path: str, mode: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def watch(self, directory: str, **options: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    async def execute_command(self, command: Union[str, List[str]], **options: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    async def glob(self, pattern: str, **options: Any) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    async def grep(self, search: Union[str, List[str]], **options: Any) -> List[Any]:
        raise NotImplementedError


class CDNProvider(ABC):
    """Base class for content delivery providers."""

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> UploadResult:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, url: str) -> DeleteResult:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, url: str) -> bool:
        raise NotImplementedError

    async def get_metadata(self, url: str) -> Optional[Dict[str, str]]:
        """Return user metadata for ``url``; providers without metadata return None."""
        return None
