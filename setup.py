"""
Setup script for the escrims package.

Installs the scrim lifecycle, organizer and matchmaking core from src/
together with the SQLite schema used by the bundled repository.
"""

from setuptools import setup, find_packages

setup(
    name="escrims",
    version="1.0.0",
    description="eScrims core - scrim lifecycle, organizer undo engine and matchmaking",
    author="eScrims Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    # Ship the schema next to the persistence modules
    package_data={
        "escrims._persistence": ["schema.sql"],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
