"""Compiler options relevant to extension discovery: Pydantic model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompilerOptions(BaseModel):
    """compiler_options section of settings.yaml.

    extensions is either an ordered list of names (no args) or a mapping of
    name -> args; mapping order is the load order.
    """

    model_config = ConfigDict(extra="allow")

    extensions: list[str] | dict[str, Any] = Field(default_factory=list)
    module_search_paths: list[str] = Field(default_factory=list)
    # Custom kinds are stored unvalidated on ExtensionDescriptor.opaque when allowed.
    allow_custom_extension_kinds: bool = True

    def extension_names(self) -> list[str]:
        return list(self.extensions)

    def extension_args(self, name: str) -> Any:
        """Per-extension args; None when extensions were given as a list."""
        if isinstance(self.extensions, dict):
            return self.extensions.get(name)
        return None
