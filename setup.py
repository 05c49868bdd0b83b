"""Setup script for users-api"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="users-api",
    version="0.1.0",
    description="CRUD REST API over a single users table",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: AsyncIO",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=[
        "starlette>=0.37",
        "uvicorn>=0.29",
        "pydantic>=2.0",
        "typer>=0.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "users-api=users_api.cli:app",
        ],
    },
    keywords="rest api crud users starlette sqlite",
)
