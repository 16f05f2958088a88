"""Locating the Android and Java toolchains."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from packaging.version import InvalidVersion, Version

from . import log
from .log import ApkcError


@dataclass
class SdkPaths:
    """Paths of the SDKs and binaries used by the build."""

    java_path: str = ""
    java_bin_path: str = ""
    javac_path: str = ""
    kotlinc_path: str = ""
    sdk_path: str = ""
    tools_path: str = ""
    zipalign_path: str = ""
    aapt2_path: str = ""
    d8_path: str = ""
    apksigner_path: str = ""
    adb_path: str = ""
    android_jar: str = ""
    keystore_path: str = ""


def latest_build_tools(path: str | os.PathLike[str]) -> str:
    """Name of the newest non-release-candidate build-tools directory."""
    versions: list[tuple[Version, str]] = []
    with os.scandir(path) as entries:
        candidates = sorted(
            entry.name
            for entry in entries
            if entry.is_dir(follow_symlinks=False) and "rc" not in entry.name
        )
    for name in candidates:
        try:
            versions.append((Version(name), name))
        except InvalidVersion:
            log.warn("doctor", f"error parsing build tools version '{name}'")
    if not versions:
        raise ApkcError("no usable build tools versions", "doctor")
    return max(versions, key=lambda item: item[0])[1]


_DEFAULT_SDK_DIRS = {
    "darwin": ("Android", "Sdk"),
    "linux": ("Library", "Android", "sdk"),
    "win32": ("AppData", "Local", "Android", "sdk"),
}


def find_sdks(
    home: str | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> SdkPaths:
    """Work out SDK and tool paths from the environment and platform defaults."""
    if environ is None:
        environ = os.environ
    if platform is None:
        platform = sys.platform
    if home is None:
        try:
            home = str(Path.home())
        except RuntimeError as exc:
            log.fatal("doctor", exc)

    paths = SdkPaths(keystore_path=os.path.join(home, ".android", "debug.keystore"))

    paths.sdk_path = environ.get("ANDROID_HOME", "")
    if not paths.sdk_path:
        log.warn("doctor", "ANDROID_HOME was not found in environment")
        default = _DEFAULT_SDK_DIRS.get(platform)
        if default is None:
            log.warn("doctor", "SDK path unknown")
        else:
            paths.sdk_path = os.path.join(home, *default)

    if paths.sdk_path:
        sdk = paths.sdk_path
        build_tools_dir = os.path.join(sdk, "build-tools")
        try:
            bt_version = latest_build_tools(build_tools_dir)
        except (ApkcError, OSError) as exc:
            log.error("doctor", exc)
            bt_version = ""
        paths.tools_path = os.path.join(build_tools_dir, bt_version) if bt_version else build_tools_dir
        paths.aapt2_path = os.path.join(paths.tools_path, "aapt2")
        paths.d8_path = os.path.join(paths.tools_path, "d8")
        paths.zipalign_path = os.path.join(paths.tools_path, "zipalign")
        paths.apksigner_path = os.path.join(paths.tools_path, "apksigner")
        paths.adb_path = os.path.join(sdk, "platform-tools", "adb")
        api = bt_version.split(".")[0]
        paths.android_jar = os.path.join(sdk, "platforms", f"android-{api}", "android.jar")

    paths.java_path = environ.get("JAVA_HOME", "")
    if paths.java_path:
        paths.java_bin_path = os.path.join(paths.java_path, "bin")
        paths.javac_path = os.path.join(paths.java_bin_path, "javac")
    else:
        log.warn("doctor", "JAVA_HOME was not found in environment")
        paths.javac_path = "javac"

    paths.kotlinc_path = "kotlinc"
    return paths


def doctor(paths: SdkPaths) -> None:
    """Report the SDK and binary paths in use."""
    log.info("doctor", "java", paths.java_path)
    log.info("doctor", "javac", paths.javac_path)
    log.info("doctor", "kotlinc", paths.kotlinc_path)
    log.info("doctor", "sdk", paths.sdk_path)
    log.info("doctor", "aapt2", paths.aapt2_path)
    log.info("doctor", "d8", paths.d8_path)
    log.info("doctor", "zipalign", paths.zipalign_path)
    log.info("doctor", "apksigner", paths.apksigner_path)
    log.info("doctor", "android jar", paths.android_jar)