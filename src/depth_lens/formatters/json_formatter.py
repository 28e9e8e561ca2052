"""JSON formatter for depth-lens."""

import json

from .base import BaseFormatter, Result


class JsonFormatter(BaseFormatter):
    """Render results as their JSON result contract."""

    def render(self, result: Result) -> None:
        print(self.format(result))

    def format(self, result: Result) -> str:
        return json.dumps(result.to_dict(), indent=2)
