"""
Setup script for archgraph: architecture diagrams from system integration records
"""

from setuptools import setup, find_packages

setup(
    name="archgraph",
    version="1.0.0",
    description="Dependency, path, landscape and business capability diagrams from system integration records",
    long_description="Builds single-system dependency diagrams, integration path diagrams, landscape diagrams and business capability trees from solution review records",
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests*", "docs*", "examples*"]),
    python_requires=">=3.9",
    install_requires=[
        # Core dependencies
        "pydantic>=2.11.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",

        # Graph
        "networkx>=3.0",

        # Upstream client
        "requests>=2.31.0",

        # API
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.25.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "mypy>=1.0.0",
            "flake8>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "archgraph=archgraph.cli:main",
        ],
    },
    author="ArchGraph Team",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="architecture dependency-diagram integration-graph business-capabilities",
)
