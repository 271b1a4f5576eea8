from setuptools import find_packages, setup

setup(
    name="jsx2ttl",
    version="0.1.0",
    description="Lower JSX element trees into tagged-template constructor calls",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.1",
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "jsx2ttl=jsx2ttl.cli.main:cli",
        ],
    },
    zip_safe=False,
)
