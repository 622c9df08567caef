# src/slspack/service.py
"""Typed view of the serverless service descriptor.

The host hands us a loosely shaped mapping (functions, provider, package,
custom). Everything this package reads from it goes through the types below,
so capability checks (has_handler / has_image / has_entrypoint) replace ad hoc
attribute probing.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import CUSTOM_RUNTIME, DEFAULT_RUNTIME, GOOGLE_PROVIDER, NODE_RUNTIME_MARKER
from .errors import ConfigurationError
from .utils import load_jsonc, remove_path_in_error_message


@dataclass(frozen=True)
class ImageSpec:
    """Container image settings of a function."""

    name: str | None = None
    uri: str | None = None
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionDefinition:
    """One declared function. Read-only for this package."""

    name: str
    handler: str | None = None
    # plain string (remote image reference) or structured spec
    image: str | ImageSpec | None = None
    # layer indirection: the source-level handler of a layer-hosted function
    entrypoint: str | None = None
    runtime: str | None = None
    allow_custom_runtime: bool = False

    @property
    def has_handler(self) -> bool:
        return bool(self.handler)

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def has_entrypoint(self) -> bool:
        return bool(self.entrypoint)

    @property
    def is_external_image(self) -> bool:
        """True when the image is built elsewhere (plain reference or uri)."""
        if isinstance(self.image, str):
            return True
        return isinstance(self.image, ImageSpec) and bool(self.image.uri)

    @classmethod
    def from_dict(cls, name: str, raw: Mapping[str, Any]) -> "FunctionDefinition":
        image_raw = raw.get("image")
        image: str | ImageSpec | None
        if image_raw is None or isinstance(image_raw, str):
            image = image_raw
        elif isinstance(image_raw, Mapping):
            command = image_raw.get("command") or ()
            if isinstance(command, str):
                command = (command,)
            image = ImageSpec(
                name=image_raw.get("name"),
                uri=image_raw.get("uri"),
                command=tuple(command),
            )
        else:
            xmsg = (
                f"Invalid image for function {name!r}: expected a string or a "
                f"mapping, got {type(image_raw).__name__}"
            )
            raise ConfigurationError(xmsg)

        return cls(
            name=name,
            handler=raw.get("handler"),
            image=image,
            entrypoint=raw.get("entrypoint"),
            runtime=raw.get("runtime"),
            allow_custom_runtime=bool(raw.get("allowCustomRuntime", False)),
        )


@dataclass
class ServiceDescriptor:
    """The parts of a serverless service this package consumes."""

    service_path: Path
    functions: dict[str, FunctionDefinition] = field(default_factory=dict)
    provider_name: str | None = None
    provider_runtime: str | None = None
    package_individually: bool = False
    custom: dict[str, Any] = field(default_factory=dict)

    @property
    def is_provider_google(self) -> bool:
        return self.provider_name == GOOGLE_PROVIDER

    def get_function(self, name: str) -> FunctionDefinition:
        try:
            return self.functions[name]
        except KeyError:
            xmsg = f'Function "{name}" doesn\'t exist in this Service'
            raise ConfigurationError(xmsg) from None

    def effective_runtime(self, func: FunctionDefinition) -> str:
        return func.runtime or self.provider_runtime or DEFAULT_RUNTIME

    def is_bundled_function(self, func: FunctionDefinition) -> bool:
        """Whether the function's runtime is one we bundle for.

        Node runtimes look like 'nodejs18.x' (AWS, Azure) or 'google-nodejs'.
        The custom 'provided' runtime only counts with an explicit opt-in.
        """
        runtime = self.effective_runtime(func)
        if NODE_RUNTIME_MARKER in runtime:
            return True
        return runtime == CUSTOM_RUNTIME and func.allow_custom_runtime

    def bundled_functions(self) -> list[FunctionDefinition]:
        """Functions eligible for bundling, in declaration order.

        Images referenced by uri or as a plain string are not built here.
        """
        return [
            func
            for func in self.functions.values()
            if not func.is_external_image and self.is_bundled_function(func)
        ]

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], service_path: Path) -> "ServiceDescriptor":
        """Build a descriptor from a parsed serverless.yml-shaped mapping."""
        functions_raw = raw.get("functions") or {}
        if not isinstance(functions_raw, Mapping):
            xmsg = "`functions` must be a mapping of function name to definition"
            raise ConfigurationError(xmsg)
        functions = {
            name: FunctionDefinition.from_dict(name, definition or {})
            for name, definition in functions_raw.items()
        }

        provider = raw.get("provider") or {}
        if isinstance(provider, str):
            provider = {"name": provider}
        package = raw.get("package") or {}

        return cls(
            service_path=service_path,
            functions=functions,
            provider_name=provider.get("name"),
            provider_runtime=provider.get("runtime"),
            package_individually=bool(package.get("individually", False)),
            custom=dict(raw.get("custom") or {}),
        )


def load_service_file(path: Path) -> ServiceDescriptor:
    """Load a service descriptor from a JSON/JSONC file.

    The service path is the directory holding the file.
    """
    if not path.is_file():
        xmsg = f"Service descriptor not found: {path}"
        raise ConfigurationError(xmsg)
    try:
        raw = load_jsonc(path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), path)
        xmsg = f"Error while loading service descriptor '{path.name}': {clean_msg}"
        raise ConfigurationError(xmsg) from e
    if not isinstance(raw, Mapping):
        xmsg = f"Service descriptor '{path.name}' must contain an object"
        raise ConfigurationError(xmsg)
    return ServiceDescriptor.from_dict(raw, path.resolve().parent)
