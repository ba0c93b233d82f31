"""File output writer."""

from pathlib import Path

import aiofiles


class FileOutput:
    """Write formatted documentation to a file."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)

    async def write(self, content: str) -> Path:
        """Write content, creating parent directories as needed."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not content.endswith("\n"):
            content += "\n"

        async with aiofiles.open(self.output_path, "w", encoding="utf-8") as f:
            await f.write(content)

        return self.output_path
