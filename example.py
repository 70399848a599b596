#!/usr/bin/env python3
"""
Example usage of the JSON file tree converter.

This script builds a file tree from a JSON description of a small
project, prints it, and packs it into a ZIP archive.
"""

import asyncio
import json
import tempfile
from pathlib import Path
from json_filetree import JSONFileTreeConverter, read_entries
from json_filetree.rendering import render_tree
from json_filetree.utils import SizeCalculator, generate_unique_filename


async def main():
    """Main example function."""
    print("JSON File Tree Example")
    print("=" * 50)

    # Describe a project: objects become folders, everything else files
    sample_data = {
        "src": {
            "index.js": "import { greet } from './greet.js';\ngreet('world');\n",
            "greet.js": "export const greet = (name) => console.log(`Hello, ${name}!`);\n",
            "components": {
                "Button.jsx": "export default () => <button>Click</button>;\n"
            }
        },
        "README.md": "# Demo project\n\nGenerated from JSON.\n",
        "package.json": {
            "content": {
                "name": "demo",
                "version": "1.0.0",
                "type": "module"
            }
        },
        "LICENSE": {"type": "file", "data": "MIT"},
        "fixtures": [
            {"id": 1, "title": "First"},
            {"id": 2, "title": "Second"}
        ],
        "logs": {}
    }

    json_string = json.dumps(sample_data, indent=2)
    print(f"Original JSON size: {len(json_string)} characters\n")

    converter = JSONFileTreeConverter(enable_profiling=True)

    tree = converter.build_tree(json_string)
    if not tree.success:
        print("❌ Failed to build tree")
        for error in tree.errors:
            print(f"   Error: {error}")
        return

    print(render_tree(tree.nodes))
    print(f"\n{tree.folder_count} folders, {tree.file_count} files, "
          f"{SizeCalculator.format_file_size(tree.total_size)}\n")

    result = await converter.convert_to_archive(json_string)
    if not result.success:
        print("❌ Failed to create archive")
        for error in result.errors:
            print(f"   Error: {error}")
        return

    with tempfile.TemporaryDirectory() as temp_dir:
        archive_path = Path(temp_dir) / generate_unique_filename("demo")
        archive_path.write_bytes(result.archive)
        print(f"✅ Wrote {archive_path.name} "
              f"({SizeCalculator.format_file_size(result.archive_size)})")

        print("\nArchive entries:")
        for entry in read_entries(archive_path.read_bytes()):
            print(f"   {entry.path}")

    summary = converter.profiler.get_performance_summary()
    print(f"\nProfiled {summary['total_operations']} operations "
          f"in {summary['total_duration']:.3f}s")


if __name__ == "__main__":
    asyncio.run(main())
