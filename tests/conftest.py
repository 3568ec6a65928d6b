"""Test configuration for sdkpatcher."""

import pytest
import structlog
from pathlib import Path
import tempfile

from sdkpatcher.collaborators import Collaborators
from sdkpatcher.core.config import Settings
from sdkpatcher.core.types import StepResult
from sdkpatcher.models.build import FeatureFlags, ScriptingBackend, UIFramework

APPX_NAMESPACE = "http://schemas.microsoft.com/appx/manifest/foundation/windows10"

APP_MANIFEST = f"""<?xml version="1.0" encoding="utf-8"?>
<Package xmlns="{APPX_NAMESPACE}" xmlns:mp="http://schemas.microsoft.com/appx/2014/phone/manifest" xmlns:uap="http://schemas.microsoft.com/appx/manifest/uap/windows10" IgnorableNamespaces="uap mp">
  <!-- generated by the build -->
  <Identity Name="Template" Publisher="CN=Test" Version="1.0.0.0" />
  <Applications>
    <Application Id="App" Executable="$targetnametoken$.exe" EntryPoint="Template.App">
      <uap:VisualElements DisplayName="Template" Description="Template" />
    </Application>
  </Applications>
</Package>
"""

PROJECT_JSON = """{
  "dependencies": {
    "Microsoft.NETCore.UniversalWindowsPlatform": "5.0.0"
  },
  "frameworks": {
    "uap10.0": {}
  },
  "runtimes": {
    "win10-x86": {}
  }
}
"""

PBXPROJ = """// !$*UTF8*$!
{
\tarchiveVersion = 1;
\tobjects = {

/* Begin XCBuildConfiguration section */
\t\t1D6058940D05DD3E006BFB54 /* Debug */ = {
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {
\t\t\t\tOTHER_LDFLAGS = (
\t\t\t\t\t"$(inherited)",
\t\t\t\t\t"-ObjC",
\t\t\t\t);
\t\t\t\tPRODUCT_NAME = "$(TARGET_NAME)";
\t\t\t};
\t\t\tname = Debug;
\t\t};
\t\t1D6058950D05DD3E006BFB54 /* Release */ = {
\t\t\tisa = XCBuildConfiguration;
\t\t\tbuildSettings = {
\t\t\t\tCLANG_ENABLE_MODULES = NO;
\t\t\t\tOTHER_LDFLAGS = "-ObjC";
\t\t\t};
\t\t\tname = Release;
\t\t};
/* End XCBuildConfiguration section */
\t};
\trootObject = 29B97313FDCFA39411CA2CEA /* Project object */;
}
"""

INFO_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
\t<key>CFBundleIdentifier</key>
\t<string>com.example.game</string>
\t<key>CFBundleName</key>
\t<string>Game</string>
</dict>
</plist>
"""

XAML_DOTNET_APP = """namespace Template
{
    sealed partial class App : Application
    {
        protected override void OnLaunched(LaunchActivatedEventArgs args)
        {
            splashScreen = args.SplashScreen;
            InitializeUnity(args.Arguments);
        }
    }
}
"""


class RecordingRunner:
    """Process runner stand-in that records invocations instead of launching."""

    def __init__(self):
        self.calls = []

    def run(self, command, arguments=(), timeout_seconds=None, cwd=None):
        self.calls.append((command, list(arguments), timeout_seconds))
        return StepResult.applied("run_process", command=str(command))


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test so log capture stays reliable."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_dir):
    """Settings with a fake toolchain containing nuget.exe.

    Returns:
        Settings: Configuration pointing at the packaged resources.
    """
    toolchain = temp_dir / "Editor" / "Data"
    nuget = toolchain / "PlaybackEngines" / "MetroSupport" / "Tools" / "nuget.exe"
    nuget.parent.mkdir(parents=True)
    nuget.write_text("")
    return Settings(toolchain_path=toolchain, restore_timeout_seconds=30)


@pytest.fixture
def flags():
    """Feature flags for a .NET XAML UWP build with push enabled."""
    return FeatureFlags(
        use_push=True,
        use_distribute=True,
        ios_app_secret="secret-123",
        product_name="Template",
        scripting_backend=ScriptingBackend.DOTNET,
        ui_framework=UIFramework.XAML,
        application_identifier="com.example.game",
        export_android_project=True,
    )


@pytest.fixture
def runner():
    """A recording process runner."""
    return RecordingRunner()


@pytest.fixture
def collaborators():
    """The default collaborator bundle without an Android hook."""
    detected = Collaborators.detect()
    return Collaborators(
        project_editor=detected.project_editor,
        plist_editor=detected.plist_editor,
        capability_editor=detected.capability_editor,
    )


@pytest.fixture
def uwp_project(temp_dir):
    """Create a minimal generated UWP project tree.

    Returns:
        Path: The build output directory.
    """
    output = temp_dir / "build"
    app_dir = output / "Template"
    app_dir.mkdir(parents=True)
    (app_dir / "Package.appxmanifest").write_text(APP_MANIFEST, encoding="utf-8")
    (app_dir / "App.xaml.cs").write_text(XAML_DOTNET_APP, encoding="utf-8")
    (app_dir / "project.json").write_text(PROJECT_JSON, encoding="utf-8")
    debugger = output / "Il2CppOutputProject/IL2CPP/libil2cpp/icalls/mscorlib/System.Diagnostics/Debugger.cpp"
    debugger.parent.mkdir(parents=True)
    debugger.write_text("// broken generated shim\n", encoding="utf-8")
    return output


@pytest.fixture
def ios_project(temp_dir):
    """Create a minimal generated Xcode project tree.

    Returns:
        Path: The build output directory.
    """
    output = temp_dir / "ios"
    project_dir = output / "Unity-iPhone.xcodeproj"
    project_dir.mkdir(parents=True)
    (project_dir / "project.pbxproj").write_text(PBXPROJ, encoding="utf-8")
    (output / "Info.plist").write_text(INFO_PLIST, encoding="utf-8")
    return output
