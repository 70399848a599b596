"""Data models for the JSON file tree converter."""

from .tree_node import FileNode, FolderNode, TreeNode, encode_content, join_path, node_from_dict

__all__ = ["FileNode", "FolderNode", "TreeNode", "encode_content", "join_path", "node_from_dict"]
