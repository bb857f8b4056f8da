from pathlib import Path
import os
import yaml

from linectl.core.model import LineConf


class LineConfLoader:
    """
    Loads the linectl configuration file (lineconf.yaml).

    Resolution order for the config path:
      1. Explicit --lineconf argument
      2. LINECONF environment variable
      3. Default: ~/.line/lineconf.yaml

    A missing file at the default location is not an error: the client then
    talks to localhost:12345.
    """

    DEFAULT_PATH = "~/.line/lineconf.yaml"

    def __init__(self, cli_path: str | None = None):
        self.explicit = True

        if cli_path:
            self.path = Path(cli_path).expanduser()
            return

        env_path = os.environ.get("LINECONF")
        if env_path:
            self.path = Path(env_path).expanduser()
            return

        self.explicit = False
        self.path = Path(self.DEFAULT_PATH).expanduser()

    def load(self) -> LineConf:
        if not self.path.exists():
            if self.explicit:
                raise FileNotFoundError(f"lineconf not found: {self.path}")
            return LineConf.default()

        try:
            data = yaml.safe_load(self.path.read_text())
        except yaml.YAMLError as ex:
            raise ValueError(f"lineconf is not valid YAML: {self.path.absolute()}") from ex

        try:
            return LineConf.from_dict(data)
        except (AttributeError, KeyError, TypeError) as ex:
            raise ValueError(f"lineconf format is invalid: {self.path.absolute()}") from ex
