from setuptools import find_namespace_packages, setup

setup(
    name="flexagon-engine",
    version="0.1.0",
    description="Symbolic flexagon engine: pats, flexes, state search and flex group tables",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["flexagon*"]),
    python_requires=">=3.10",
    install_requires=[
        "networkx",
        "numpy",
        "matplotlib",
        "pandas",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
