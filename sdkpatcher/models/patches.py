"""
Patch descriptors.

Static configuration describing what gets patched: where push hook code is
injected for each scripting backend and UI framework, which manifest capability
is declared, and which native packages the .NET backend needs. Toolchain quirks
should be handled by editing these tables, not the editors.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .build import ScriptingBackend, UIFramework

SENTINEL_COMMENT = "App Center Push code:"


class InjectionSpec(BaseModel):
    """Where and what to inject into a generated source file."""

    target_file: str = Field(description="File name relative to the app source directory")
    anchor_pattern: str = Field(
        description="Regex locating the insertion point; literal spaces match any whitespace"
    )
    template_resource: str = Field(description="Template path relative to the resources directory")
    include_anchor_text: bool = Field(
        default=True, description="Keep the matched anchor in front of the injected block"
    )

    model_config = {"frozen": True}


class CapabilityDeclaration(BaseModel):
    """A capability element to declare in an application manifest."""

    container_name: str = "Capabilities"
    element_name: str = "Capability"
    name_attribute: str = "Name"
    name: str = "internetClient"

    model_config = {"frozen": True}


class DependencyEntry(BaseModel):
    """A package id / version pair in a dependency manifest."""

    package_id: str
    version: str

    model_config = {"frozen": True}

    def quoted(self) -> str:
        """Render as a JSON key/value pair."""
        return f'"{self.package_id}": "{self.version}"'


PUSH_INJECTION_SPECS: dict[tuple[ScriptingBackend, UIFramework], InjectionSpec] = {
    (ScriptingBackend.DOTNET, UIFramework.D3D): InjectionSpec(
        target_file="App.cs",
        anchor_pattern=(
            r"private void ApplicationView_Activated \( CoreApplicationView [a-zA-Z0-9_]*, "
            r"IActivatedEventArgs args \) {"
        ),
        template_resource="push/d3ddotnet.txt",
    ),
    (ScriptingBackend.DOTNET, UIFramework.XAML): InjectionSpec(
        target_file="App.xaml.cs",
        anchor_pattern=r"InitializeUnity\(args.Arguments\);",
        template_resource="push/xamldotnet.txt",
        include_anchor_text=False,
    ),
    (ScriptingBackend.IL2CPP, UIFramework.XAML): InjectionSpec(
        target_file="App.xaml.cpp",
        anchor_pattern=r"InitializeUnity\(e->Arguments\);",
        template_resource="push/xamlil2cpp.txt",
        include_anchor_text=False,
    ),
    (ScriptingBackend.IL2CPP, UIFramework.D3D): InjectionSpec(
        target_file="App.cpp",
        anchor_pattern=(
            r"void App::OnActivated\(CoreApplicationView\s*\^ [a-zA-Z0-9_]+, "
            r"IActivatedEventArgs\s*\^ [a-zA-Z0-9_]+\) {"
        ),
        template_resource="push/d3dil2cpp.txt",
    ),
}

INTERNET_CLIENT = CapabilityDeclaration()

UWP_DOTNET_DEPENDENCIES: tuple[DependencyEntry, ...] = (
    DependencyEntry(package_id="Microsoft.NETCore.UniversalWindowsPlatform", version="5.2.2"),
    DependencyEntry(package_id="Newtonsoft.Json", version="10.0.3"),
    DependencyEntry(package_id="sqlite-net-pcl", version="1.3.1"),
    DependencyEntry(package_id="System.Collections.NonGeneric", version="4.0.1"),
)

IL2CPP_DEBUGGER_RESOURCE = "il2cpp/Debugger.cpp.txt"
IL2CPP_DEBUGGER_TARGET = (
    "Il2CppOutputProject/IL2CPP/libil2cpp/icalls/mscorlib/System.Diagnostics/Debugger.cpp"
)
