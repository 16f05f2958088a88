"""Installing the app on a device and following its log."""

from __future__ import annotations

import os
import subprocess

from . import log
from .manifest import Manifest, read_manifest
from .sdk import SdkPaths
from .utils import prompt

TAG = "run"


def parse_devices(output: str) -> list[str]:
    """Device lines from the output of `adb devices`, header removed."""
    return [line.rstrip("\r") for line in output.strip().split("\n")[1:]]


def choose_device(devices: list[str]) -> tuple[str, str]:
    """Pick a device, asking the user when there are several; return (serial, state)."""
    if not devices:
        log.fatal(TAG, "no devices found")

    number = 1
    if len(devices) > 1:
        for index, device in enumerate(devices, start=1):
            print(f"[{index}] {device}")
        try:
            number = int(prompt("Choose device to run app (1):", "1"))
        except ValueError:
            log.fatal(TAG, "invalid number")
    if not 1 <= number <= len(devices):
        log.fatal(TAG, "invalid number")

    fields = devices[number - 1].split("\t")
    if len(fields) < 2:
        log.fatal(TAG, "malformed device line", devices[number - 1])
    return fields[0], fields[1]


def _adb(paths: SdkPaths, *args: str, combined: bool = True) -> str:
    stderr = subprocess.STDOUT if combined else subprocess.PIPE
    try:
        result = subprocess.run([paths.adb_path, *args], stdout=subprocess.PIPE, stderr=stderr)
    except OSError as exc:
        log.fatal(TAG, exc)
        return ""
    output = result.stdout.decode(errors="replace")
    if result.returncode != 0:
        log.fatal(TAG, f"exit status {result.returncode}", output)
    return output


def run(paths: SdkPaths) -> None:
    """Install build/app.apk, start its main activity and stream its logcat."""
    devices = parse_devices(_adb(paths, "devices", combined=False))
    serial, state = choose_device(devices)

    log.info(TAG, "installing in", f"{state}({serial})")
    _adb(paths, "-s", serial, "install", "-r", os.path.join("build", "app.apk"))

    try:
        manifest = read_manifest("AndroidManifest.xml")
    except OSError as exc:
        log.fatal(TAG, exc)
        return
    except ValueError:
        manifest = Manifest()
    package = manifest.package
    activity = manifest.application.main_activity()
    if not activity:
        log.fatal(TAG, "couldn't find main activity")

    log.info(TAG, "launching main activity")
    _adb(paths, "shell", "am", "start", "-W", "-S", "-n", f"{package}/{activity}")

    pid = _adb(paths, "shell", "pidof", "-s", package, combined=False).strip()

    try:
        result = subprocess.run([paths.adb_path, "logcat", "-v", "color", "--pid", pid])
    except OSError as exc:
        log.fatal(TAG, exc)
        return
    if result.returncode != 0:
        log.fatal(TAG, f"exit status {result.returncode}")