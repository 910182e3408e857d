"""Shared test fixtures for the Gradle project model tests."""

import logging
from pathlib import Path

import pytest

from gradle_model.base_project import BaseProject
from gradle_model.sourceset import SourceKind, SourceSet


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI commands configure logging; keep each test independent of that."""
    yield
    logging.getLogger("gradle_model").setLevel(logging.NOTSET)


@pytest.fixture
def base_project():
    """Minimal base project fact rooted at /p."""
    return BaseProject(
        name="p",
        project_dir=Path("/p"),
        root_dir=Path("/p"),
        build_dir=Path("/p/build"),
    )


@pytest.fixture
def main_set():
    """The main source set of /p with Java and resources roots."""
    return SourceSet(
        "main",
        source_roots={
            SourceKind.JAVA: {Path("/p/src/main/java")},
            SourceKind.RESOURCES: {Path("/p/src/main/resources")},
        },
        output_class_dirs={Path("/p/build/classes/java/main")},
        output_resources_dir=Path("/p/build/resources/main"),
        compile_classpath={Path("/p/libs/a.jar")},
    )


@pytest.fixture
def test_set(main_set):
    """The test source set of /p, depending on main."""
    return SourceSet(
        "test",
        source_roots={
            SourceKind.JAVA: {Path("/p/src/test/java")},
            SourceKind.RESOURCES: {Path("/p/src/test/resources")},
        },
        output_class_dirs={Path("/p/build/classes/java/test")},
        output_resources_dir=Path("/p/build/resources/test"),
        is_test=True,
        depends_on={main_set},
    )


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def gradle_project(tmp_path):
    """A conventional Gradle project on disk.

    Layout:
        demo/build.gradle              sourceCompatibility 1.8
        demo/settings.gradle           includes core and app:web
        demo/gradle.properties         ide.* options
        demo/src/main/{java,groovy,resources,webapp}
        demo/src/test/java
        demo/src/integrationTest/java
        demo/build/resources/main/app.properties
        demo/libs/guava.jar
    """
    root = tmp_path / "demo"
    _write(
        root / "build.gradle",
        "plugins { id 'java' }\n"
        "java {\n"
        "    sourceCompatibility = JavaVersion.VERSION_1_8\n"
        "    targetCompatibility = JavaVersion.VERSION_11\n"
        "}\n",
    )
    _write(
        root / "settings.gradle",
        "rootProject.name = 'demo-app'\ninclude 'core', ':app:web'\n",
    )
    _write(
        root / "gradle.properties",
        "# IDE options\n"
        "ide.compile.on.save=true\n"
        "ide.jdkPlatform = jdk17\n"
        "org.gradle.jvmargs=-Xmx1g\n",
    )
    _write(root / "src/main/java/com/example/App.java", "package com.example;\n")
    _write(root / "src/main/groovy/com/example/Script.groovy")
    _write(root / "src/main/resources/app.properties", "source=true\n")
    _write(root / "src/main/webapp/index.html")
    _write(root / "src/test/java/com/example/AppTest.java")
    _write(root / "src/integrationTest/java/com/example/AppIT.java")
    _write(root / "build/resources/main/app.properties", "output=true\n")
    _write(root / "libs/guava.jar")
    return root
