"""Tree node model implementation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union
from ..types import NodeType, StructureError


PATH_SEPARATOR = "/"


def join_path(base_path: str, name: str) -> str:
    """Join a parent path and a node name; the root has no leading separator."""
    return f"{base_path}{PATH_SEPARATOR}{name}" if base_path else name


def encode_content(content: str) -> bytes:
    """UTF-8 bytes of file content; unpaired surrogates are kept as-is."""
    return content.encode("utf-8", errors="surrogatepass")


@dataclass
class FileNode:
    """
    Leaf of the converted tree.

    ``size`` is the UTF-8 byte length of ``content`` and is computed
    when not given explicitly.
    """

    name: str
    path: str
    content: str
    size: Optional[int] = None

    def __post_init__(self):
        """Validate node after initialization."""
        if self.size is None:
            self.size = len(encode_content(self.content))
        _validate_name_and_path(self.name, self.path)
        if self.size < 0:
            raise ValueError("size must be non-negative")

    @property
    def node_type(self) -> NodeType:
        return NodeType.FILE

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to a JSON-serializable dictionary."""
        return {
            "type": self.node_type.value,
            "name": self.name,
            "path": self.path,
            "content": self.content,
            "size": self.size,
        }

    def clone(self) -> "FileNode":
        return FileNode(name=self.name, path=self.path, content=self.content, size=self.size)


@dataclass
class FolderNode:
    """Inner node of the converted tree; children keep the source order."""

    name: str
    path: str
    children: List["TreeNode"] = field(default_factory=list)

    def __post_init__(self):
        """Validate node after initialization."""
        _validate_name_and_path(self.name, self.path)

    @property
    def node_type(self) -> NodeType:
        return NodeType.FOLDER

    def is_empty(self) -> bool:
        """Check if folder has no children."""
        return not self.children

    def iter_children(self) -> Iterator["TreeNode"]:
        return iter(self.children)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert folder and all descendants to a JSON-serializable dictionary.

        Returns:
            Dictionary with ``type``, ``name``, ``path`` and ``children``
        """
        result: Dict[str, Any] = {
            "type": self.node_type.value,
            "name": self.name,
            "path": self.path,
            "children": [],
        }
        stack = [(self, result)]
        while stack:
            folder, target = stack.pop()
            for child in folder.children:
                if isinstance(child, FolderNode):
                    child_dict = {
                        "type": child.node_type.value,
                        "name": child.name,
                        "path": child.path,
                        "children": [],
                    }
                    stack.append((child, child_dict))
                else:
                    child_dict = child.to_dict()
                target["children"].append(child_dict)
        return result

    def clone(self) -> "FolderNode":
        """Create a deep copy of this folder."""
        copy = FolderNode(name=self.name, path=self.path)
        stack = [(self, copy)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                if isinstance(child, FolderNode):
                    child_copy = FolderNode(name=child.name, path=child.path)
                    stack.append((child, child_copy))
                    target.children.append(child_copy)
                else:
                    target.children.append(child.clone())
        return copy


TreeNode = Union[FolderNode, FileNode]


def node_from_dict(data: Dict[str, Any]) -> TreeNode:
    """
    Create a node (and its descendants) from its dictionary form.

    Args:
        data: Dictionary produced by ``to_dict``

    Returns:
        FolderNode or FileNode

    Raises:
        StructureError: If the dictionary does not describe a valid node
    """
    root_holder: List[TreeNode] = []
    stack = [(data, root_holder)]
    while stack:
        item, siblings = stack.pop(0)
        if not isinstance(item, dict):
            raise StructureError(f"Node must be a dict, got {type(item).__name__}")
        node_type = item.get("type")
        try:
            if node_type == NodeType.FILE.value:
                siblings.append(FileNode(
                    name=item["name"],
                    path=item["path"],
                    content=item["content"],
                    size=item.get("size"),
                ))
            elif node_type == NodeType.FOLDER.value:
                folder = FolderNode(name=item["name"], path=item["path"])
                siblings.append(folder)
                children = item.get("children", [])
                if not isinstance(children, list):
                    raise StructureError("children must be a list", path=item["path"])
                stack.extend((child, folder.children) for child in children)
            else:
                raise StructureError(f"Unknown node type: {node_type!r}",
                                     path=item.get("path"))
        except KeyError as e:
            raise StructureError(f"Node is missing required field {e.args[0]!r}",
                                 path=item.get("path"))
        except ValueError as e:
            raise StructureError(str(e), path=item.get("path"))
    return root_holder[0]


def _validate_name_and_path(name: str, path: str) -> None:
    if not name:
        raise ValueError("name cannot be empty")

    if path.startswith(PATH_SEPARATOR):
        raise ValueError("path must not start with a separator")

    if path != name and not path.endswith(PATH_SEPARATOR + name):
        raise ValueError("path must end with the node name")
