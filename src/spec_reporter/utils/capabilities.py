from typing import Optional, Mapping, Any, Union
from pydantic import BaseModel, ConfigDict

APP_STORAGE_PREFIX = "sauce-storage:"

class Capabilities(BaseModel):
    """Execution environment a worker reports; every field is optional."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    deviceName: Optional[str] = None
    browserName: Optional[str] = None
    browser: Optional[str] = None
    version: Optional[str] = None
    platformVersion: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    platform: Optional[str] = None
    platformName: Optional[str] = None
    app: Optional[str] = None

    @property
    def browser_label(self) -> str:
        return self.browserName or self.browser or ""

    @property
    def version_label(self) -> str:
        return self.version or self.platformVersion or self.browser_version or ""

    @property
    def platform_label(self) -> str:
        if self.os:
            return f"{self.os} {self.os_version or ''}".strip()
        return self.platform or self.platformName or ""

def as_capabilities(caps: Union[Capabilities, Mapping[str, Any], None]) -> Capabilities:
    if isinstance(caps, Capabilities):
        return caps
    return Capabilities.model_validate(dict(caps or {}))

def describe(caps: Union[Capabilities, Mapping[str, Any], None], verbose: bool = True) -> str:
    c = as_capabilities(caps)
    browser, version, platform = c.browser_label, c.version_label, c.platform_label

    # mobile capabilities
    if c.deviceName:
        program = (c.app or "").replace(APP_STORAGE_PREFIX, "") or c.browserName or ""
        executing = f"executing {program}" if program else ""
        if not verbose:
            return f"{c.deviceName} {platform} {version}"
        return f"{c.deviceName} on {platform} {version} {executing}".strip()

    if not verbose:
        return f"{browser} {version} {platform}".strip()
    return browser + (f" (v{version})" if version else "") + (f" on {platform}" if platform else "")
