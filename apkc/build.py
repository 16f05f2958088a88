"""Compiling resources and sources and packing them into a bundle."""

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import zipfile
from collections.abc import Sequence

from . import log
from .sdk import SdkPaths
from .utils import get_files

TAG = "build"
BUILD_DIR = "build"
FLATS_DIR = os.path.join(BUILD_DIR, "flats")
CLASSES_DIR = os.path.join(BUILD_DIR, "classes")


def _run_tool(program: str, args: list[str], *context: object) -> None:
    """Run a build tool, failing with its combined output if it does not succeed."""
    try:
        result = subprocess.run(
            [program, *args], stdout=subprocess.PIPE, stderr=subprocess.STDOUT
        )
    except OSError as exc:
        log.fatal(TAG, exc, *context)
        return
    if result.returncode != 0:
        log.fatal(TAG, result.stdout.decode(errors="replace"), *context)


def clean(root: str = ".") -> None:
    """Delete the build directory."""
    log.info("clean", "removing build/*")
    shutil.rmtree(os.path.join(root, BUILD_DIR), ignore_errors=True)


def prepare(root: str = ".") -> None:
    """Check the project layout and create the build directories."""
    for name in ("src", "res", "AndroidManifest.xml"):
        try:
            os.stat(os.path.join(root, name))
        except OSError as exc:
            log.fatal(TAG, exc)

    for directory in (FLATS_DIR, CLASSES_DIR):
        try:
            os.makedirs(os.path.join(root, directory), 0o755, exist_ok=True)
        except OSError as exc:
            log.fatal(TAG, exc)


def compile_res(paths: SdkPaths) -> None:
    """Compile the files in res/ into flat files."""
    res = get_files("res", "")
    log.info(TAG, "compiling resources")
    _run_tool(paths.aapt2_path, ["compile", "-o", FLATS_DIR, *res])


def bundle_res(paths: SdkPaths, use_aab: bool = False) -> None:
    """Link the flat files and generate the R class sources."""
    log.info(TAG, "bundling resources")
    flats = get_files(FLATS_DIR, ".flat")
    args = [
        "link",
        "-I", paths.android_jar,
        "--manifest", "AndroidManifest.xml",
        "-o", BUILD_DIR,
        "--java", "src",
        "--output-to-dir",
    ]
    if use_aab:
        args.append("--proto-format")
    _run_tool(paths.aapt2_path, [*args, *flats])


def compile_kotlin(paths: SdkPaths) -> None:
    """Compile Kotlin sources in src/, if there are any."""
    kotlins = get_files("src", "kt")
    if not kotlins:
        return

    log.info(TAG, "compiling kotlin files")
    jars = ":".join(get_files("jar", "jar"))
    args = ["-d", CLASSES_DIR, "-classpath", f"{paths.android_jar}:{jars}", "src", *kotlins]
    _run_tool(paths.kotlinc_path, args, args)


def compile_java(paths: SdkPaths) -> None:
    """Compile Java sources in src/ against the platform and jar/ libraries."""
    log.info(TAG, "compiling java files")
    javas = get_files("src", "java")
    jars = ":".join(get_files("jar", "jar"))
    classpath = f"{paths.android_jar}:{CLASSES_DIR}:{jars}"
    args = ["-d", CLASSES_DIR, "-classpath", classpath, *javas]
    _run_tool(paths.javac_path, args, args)


def bundle_java(paths: SdkPaths) -> None:
    """Convert compiled classes and jar/ libraries into dex."""
    log.info(TAG, "bundling classes and jars")
    classes = get_files(CLASSES_DIR, ".class")
    jars = get_files("jar", ".jar")
    args = ["--lib", paths.android_jar, "--release", "--output", BUILD_DIR, *classes, *jars]
    _run_tool(paths.d8_path, args, paths.d8_path, args)


def _add_file(archive: zipfile.ZipFile, source: str, name: str, compress: bool = True) -> None:
    method = zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED
    try:
        archive.write(source, name.replace(os.sep, "/"), compress_type=method)
    except OSError as exc:
        log.fatal(TAG, exc)


def build_bundle(use_aab: bool = False) -> str:
    """Pack the build outputs, assets and native libs into build/bundle.zip."""
    bundle_path = os.path.join(BUILD_DIR, "bundle.zip")
    try:
        archive = zipfile.ZipFile(bundle_path, "w")
    except OSError as exc:
        log.fatal(TAG, exc)
        return bundle_path

    with archive:
        if use_aab:
            _add_file(archive, os.path.join(BUILD_DIR, "AndroidManifest.xml"),
                      os.path.join("manifest", "AndroidManifest.xml"))
            _add_file(archive, os.path.join(BUILD_DIR, "classes.dex"),
                      os.path.join("dex", "classes.dex"))
            _add_file(archive, os.path.join(BUILD_DIR, "resources.pb"), "resources.pb")
        else:
            _add_file(archive, os.path.join(BUILD_DIR, "AndroidManifest.xml"), "AndroidManifest.xml")
            _add_file(archive, os.path.join(BUILD_DIR, "classes.dex"), "classes.dex")
            _add_file(archive, os.path.join(BUILD_DIR, "resources.arsc"), "resources.arsc",
                      compress=False)

        for path in get_files(os.path.join(BUILD_DIR, "res"), ""):
            _add_file(archive, path, os.path.relpath(path, BUILD_DIR))

        assets = get_files("assets", "")
        if assets:
            log.info(TAG, "bundling assets")
        for path in assets:
            _add_file(archive, path, path)

        libs = get_files("lib", "")
        if libs:
            log.info(TAG, "bundling native libs")
        for path in libs:
            _add_file(archive, path, path)

    return bundle_path


def parse_build_args(argv: Sequence[str], paths: SdkPaths) -> argparse.Namespace:
    """Parse the options of the build command."""
    parser = argparse.ArgumentParser(prog="apkc build", allow_abbrev=False)
    parser.add_argument("-aab", "--aab", action="store_true", help="build aab instead of apk")
    parser.add_argument("-keystore", "--keystore", default=paths.keystore_path,
                        help="path to keystore")
    parser.add_argument("-storepass", "--storepass", default="android", help="keystore password")
    parser.add_argument("-keyalias", "--keyalias", default="androiddebugkey",
                        help="key alias to use")
    parser.add_argument("-sigalg", "--sigalg", default="SHA256withRSA", help="signature to use")
    return parser.parse_args(list(argv))


def build(paths: SdkPaths, argv: Sequence[str] = ()) -> str:
    """Compile everything and pack it; return the path of the bundle."""
    options = parse_build_args(argv, paths)
    prepare()
    compile_res(paths)
    bundle_res(paths, options.aab)
    compile_kotlin(paths)
    compile_java(paths)
    bundle_java(paths)
    return build_bundle(options.aab)