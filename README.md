# apkc

A small command-line tool that compiles an Android project with the Android SDK
tools (`aapt2`, `javac`, `kotlinc`, `d8`, `adb`) directly, without a Gradle
project, and that installs and launches an app on an attached device.

## Installation

```
pip install .
```

The Android SDK and a JDK need to be installed.

- The SDK is taken from `ANDROID_HOME`. When it is not set, a default directory
  under your home directory is tried, depending on the platform.
- The newest directory in `<sdk>/build-tools` is used (names containing `rc` are
  skipped), together with `<sdk>/platforms/android-<major>/android.jar`, where
  `<major>` is the first number of that build-tools version.
- `javac` is taken from `$JAVA_HOME/bin`, or from `PATH` when `JAVA_HOME` is not
  set. `kotlinc` is always taken from `PATH`.

## Project layout

Commands are run from the project directory, which contains:

```
AndroidManifest.xml
src/        Java and Kotlin sources
res/        Android resources
jar/        optional: extra .jar libraries on the classpath
assets/     optional: bundled as-is
lib/        optional: native libraries per ABI
```

Files and directories whose names start with `.` are ignored. Build output goes
to `build/`.

## Commands

Run `apkc` with no arguments to see the command list.

```
apkc doctor   # show the SDK and tool paths that were found
apkc build    # compile resources and sources and pack them into build/bundle.zip
apkc run      # install build/app.apk on a device, launch it and stream its log
apkc clean    # delete the build/ directory
```

Any other command name does nothing. A failing step prints a red error line and
`apkc` exits with status 1.

### build

`apkc build` checks that `src/`, `res/` and `AndroidManifest.xml` exist, then:

1. compiles `res/` with `aapt2 compile` into `build/flats/`;
2. links the flat files with `aapt2 link`, writing the R class into `src/`;
3. compiles Kotlin sources (when there are any) and Java sources into
   `build/classes/`, with `android.jar` and the jars in `jar/` on the classpath;
4. converts the classes and jars to dex with `d8`;
5. writes `build/bundle.zip` holding the manifest, `classes.dex`, the resource
   table, `build/res/`, `assets/` and `lib/`.

Options:

```
apkc build -aab        # link in proto format and lay out the zip as a bundle module
                       # (manifest/AndroidManifest.xml, dex/classes.dex, resources.pb)
```

`-keystore`, `-storepass`, `-keyalias` and `-sigalg` are accepted (also with
`--`) but not used by any build step.

### run

`apkc run` lists the devices attached to `adb`. When more than one is connected
it asks which one to use. It installs `build/app.apk`, reads the package name
and the activity that handles `android.intent.action.MAIN` from
`AndroidManifest.xml`, starts that activity and follows `logcat` for the app's
process.

## What apkc does not do

- It does not create new projects; there is no `create` command, even though
  the help text lists one.
- `build` stops at `build/bundle.zip`: it does not zipalign or sign an APK, does
  not produce `build/app.apk`, and does not turn the bundle into an `.aab`.
  `apkc run` expects `build/app.apk` to have been made by other means.
- `run` does not build first.

## Library use

The pieces are also usable from Python:

```python
from apkc.manifest import read_manifest
from apkc.sdk import find_sdks, latest_build_tools
from apkc.utils import get_files

manifest = read_manifest("AndroidManifest.xml")
print(manifest.package, manifest.application.main_activity())
print(get_files("src", ".java"))

paths = find_sdks()
print(paths.aapt2_path, paths.android_jar)
```

`apkc.log` holds the coloured logger; `apkc.log.fatal` logs an error and raises
`apkc.log.ApkcError`.

## Development

```
pip install -e ".[test]"
pytest
```