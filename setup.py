#!/usr/bin/env python3
"""
Setup script for the shortlink service.
"""

from setuptools import setup, find_packages
import os

HERE = os.path.dirname(os.path.abspath(__file__))
SOURCE_DIR = "shortlink"


# Read the README file
def read_readme():
    readme_path = os.path.join(HERE, 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "URL shortening and redirect service"


# Read requirements
def read_requirements():
    req_path = os.path.join(HERE, 'requirements.txt')
    if os.path.exists(req_path):
        with open(req_path, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return []


setup(
    name="shortlink",
    version="1.0.0",
    description="URL shortening and redirect service with pluggable key-value storage",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    package_dir={"": SOURCE_DIR},
    packages=find_packages(where=SOURCE_DIR, exclude=["tests", "tests.*", "scripts", "scripts.*"]),
    py_modules=["app", "config"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.24.0",
            "httpx>=0.27.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "shortlink-server=app:main",
        ],
    },
    keywords="url shortener, redirect, fastapi, dynamodb, postgresql",
)
