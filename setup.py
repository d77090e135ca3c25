from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="optgraph",
    version="0.1.0",
    description="Exact graph invariants (coloring, cuts, connectivity) via 0/1 programming.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "dev", "examples")),
    python_requires=">=3.10",
    install_requires=["networkx>=3.0", "pulp>=2.7,<4"],
    extras_require={"test": ["pytest"]},
)
