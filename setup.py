from setuptools import setup, find_packages

setup(
    name="mindtrace",
    version="0.1.0",
    description="Mindtrace - reasoning-graph layout and project timeline engine",
    author="Mindtrace Contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        # Core data modeling and validation
        "pydantic>=2.0.0",

        # Graph export (reasoning graphs)
        "networkx>=3.0",

        # Environment variables
        "python-dotenv>=1.0.0",

        # CLI and rich output
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mindtrace = mindtrace.cli.main:main",
        ],
    },
    python_requires=">=3.11",
    package_dir={"": "."},
)
