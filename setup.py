"""
Setup script for dynview: multi-schema visual-programming graph reader and layout engine
"""

from setuptools import setup, find_packages

setup(
    name="dynview",
    version="1.0.0",
    description="Normalize visual-programming graph documents and compute their layout geometry",
    long_description="Reads node-graph JSON documents written by several incompatible schema versions, normalizes them into one canonical graph model and derives deterministic node, port and connector geometry",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*", "docs*", "examples*"]),
    python_requires=">=3.9",
    install_requires=[
        # Core dependencies
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",

        # Geometry
        "numpy>=1.24.0",

        # Visualization and export
        "networkx>=3.0",
        "matplotlib>=3.6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "mypy>=1.0.0",
            "flake8>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dynview=dynview.cli:main",
        ],
    },
    include_package_data=True,
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: Visualization",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="node-graph visual-programming dynamo layout json normalization",
)
