from pathlib import Path

from setuptools import setup, find_packages

# Version constants live in src/simple_logging/_version.py
version_info = {}
exec((Path(__file__).parent / "src" / "simple_logging" / "_version.py").read_text(), version_info)

setup(
    name="simple-logging",
    version=version_info["PIP_VERSION"],
    description="Severity-filtered logging to named console, file and callback channels",
    author="Dustin",
    author_email="6962246+djdarcy@users.noreply.github.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "dev": ["pytest>=7", "pytest-cov"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
