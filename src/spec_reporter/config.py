from pydantic import BaseModel, Field
from typing import Optional, Dict
import yaml, pathlib

DEFAULT_THEME: Dict[str, str] = {
    "green": "green",
    "pending": "cyan",
    "fail": "red",
    "error title": "",
    "error message": "red",
    "error stack": "bright_black",
}

class SymbolsConfig(BaseModel):
    ok: str = Field("✓", description="Glyph printed in front of passing tests")

class ReporterConfig(BaseModel):
    max_instances: int = Field(1, ge=1, description="Maximum concurrent workers; 1 selects real-time output")
    color: bool = Field(True)
    symbols: SymbolsConfig = Field(default_factory=SymbolsConfig)
    theme: Dict[str, str] = Field(default_factory=dict, description="Colour category -> rich style overrides")
    log_level: str = Field("INFO")

    @property
    def realtime(self) -> bool:
        return self.max_instances == 1

    def styles(self) -> Dict[str, str]:
        return {**DEFAULT_THEME, **self.theme}

def load_config(path: Optional[str] = None) -> ReporterConfig:
    if path is None or not pathlib.Path(path).exists():
        return ReporterConfig()
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return ReporterConfig.model_validate(data)
