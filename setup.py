from setuptools import setup, find_packages

setup(
    name="nouns-catalog",
    version="0.1.0",
    description="Declarative catalog of business-domain entity definitions",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "nouns.catalog": ["data/*.yaml"],
        "nouns.schema": ["templates/*.j2"],
    },
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # Relationship graph analysis
        "networkx>=3.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",

        # YAML catalog files
        "pyyaml>=6.0.0",

        # Jinja2 for Markdown documentation templates
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "nouns = nouns.app.cli:main",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
