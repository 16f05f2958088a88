import io
import os
import subprocess
import sys

import pytest

from apkc.device import choose_device, parse_devices, run
from apkc.log import ApkcError
from apkc.sdk import SdkPaths

MANIFEST = """<manifest package="com.example.app">
  <application>
    <activity name=".MainActivity">
      <intent-filter>
        <action name="android.intent.action.MAIN"/>
      </intent-filter>
    </activity>
  </application>
</manifest>
"""


def test_parse_devices_drops_header():
    output = "List of devices attached\nemulator-5554\tdevice\n\n"
    assert parse_devices(output) == ["emulator-5554\tdevice"]


def test_parse_devices_none_attached():
    assert parse_devices("List of devices attached\n") == []


def test_choose_single_device():
    assert choose_device(["emulator-5554\tdevice"]) == ("emulator-5554", "device")


def test_choose_device_none():
    with pytest.raises(ApkcError) as info:
        choose_device([])
    assert str(info.value) == "no devices found"


def test_choose_device_prompts(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2\n"))
    chosen = choose_device(["first\tdevice", "second\toffline"])
    assert chosen == ("second", "offline")
    assert "[2] second\toffline" in capsys.readouterr().out


def test_choose_device_default_on_empty_answer(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
    assert choose_device(["first\tdevice", "second\tdevice"])[0] == "first"


@pytest.mark.parametrize("answer", ["abc\n", "5\n", "0\n"])
def test_choose_device_invalid(monkeypatch, answer):
    monkeypatch.setattr(sys, "stdin", io.StringIO(answer))
    with pytest.raises(ApkcError) as info:
        choose_device(["first\tdevice", "second\tdevice"])
    assert str(info.value) == "invalid number"


@pytest.fixture
def adb(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        if cmd[1:] == ["devices"]:
            out = b"List of devices attached\nemulator-5554\tdevice\n"
        elif "pidof" in cmd:
            out = b"4242\n"
        else:
            out = b""
        return subprocess.CompletedProcess(cmd, 0, stdout=out)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_run_installs_launches_and_streams(tmp_path, monkeypatch, adb, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "AndroidManifest.xml").write_text(MANIFEST)
    run(SdkPaths(adb_path="adb"))
    captured = capsys.readouterr()
    logged = captured.out + captured.err
    assert "device(emulator-5554)" in logged
    assert "launching main activity" in logged
    assert adb[1] == ["adb", "-s", "emulator-5554", "install", "-r", os.path.join("build", "app.apk")]
    assert adb[2][-1] == "com.example.app/.MainActivity"
    assert adb[3] == ["adb", "shell", "pidof", "-s", "com.example.app"]
    assert adb[-1] == ["adb", "logcat", "-v", "color", "--pid", "4242"]


def test_run_without_main_activity(tmp_path, monkeypatch, adb):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "AndroidManifest.xml").write_text('<manifest package="com.example.app"/>')
    with pytest.raises(ApkcError) as info:
        run(SdkPaths(adb_path="adb"))
    assert str(info.value) == "couldn't find main activity"


def test_run_no_devices(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=b"List of devices attached\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ApkcError) as info:
        run(SdkPaths(adb_path="adb"))
    assert str(info.value) == "no devices found"


def test_run_adb_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ApkcError) as info:
        run(SdkPaths(adb_path="adb"))
    assert info.value.tag == "run"