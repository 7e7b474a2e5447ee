from setuptools import setup, find_packages

setup(
    name="uiauto-tree",
    version="1.0.0",
    packages=find_packages(include=["uiauto_tree", "uiauto_tree.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0", "pytest-asyncio>=0.21"],
    },
    python_requires=">=3.8",
    package_data={
        "uiauto_tree": ["schemas/*.json"],
    },
)
