import json

from src.scaffold.manifest import (
    build_manifest,
    build_scripts,
    render_local_properties,
    render_manifest,
    write_manifest,
)


def test_scripts_target_the_module():
    scripts = build_scripts("library", "com.example.widgets")
    assert scripts["clean:deep"] == "rm -rf .gradle build library/build"
    assert scripts["lsp:sync"] == "./gradlew :library:compileDebugKotlin"
    assert scripts["start"] == "npm run dev"
    assert scripts["adb"] == "node scripts/adb.js"


def test_device_scripts_target_the_package():
    scripts = build_scripts("app", "com.example.demoapp")
    assert scripts["adb:launch"] == (
        "npm run adb shell monkey -p com.example.demoapp -c android.intent.category.LAUNCHER 1"
    )
    assert scripts["adb:uninstall"] == "npm run adb uninstall com.example.demoapp"


def test_manifest_name_is_npm_safe():
    data = build_manifest(project_name="My Cool App", module_name="app", package_name="com.example.mycoolapp")
    assert data["name"] == "my-cool-app"
    assert data["private"] is True
    assert data["version"] == "0.1.0"


def test_render_manifest_is_json_with_trailing_newline():
    text = render_manifest(project_name="demo", module_name="app", package_name="com.example.demo")
    assert text.endswith("}\n")
    assert json.loads(text)["scripts"]["build"] == "./gradlew assembleRelease"


def test_write_manifest(tmp_path):
    path = write_manifest(tmp_path, project_name="demo", module_name="app", package_name="com.example.demo")
    assert path == tmp_path / "package.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["name"] == "demo"
    assert data["scripts"]["adb:uninstall"].endswith("com.example.demo")


def test_local_properties_escapes_backslashes():
    assert render_local_properties("/opt/sdk") == "sdk.dir=/opt/sdk\n"
    assert render_local_properties(r"C:\Android\sdk") == "sdk.dir=C:\\\\Android\\\\sdk\n"
