from setuptools import setup, find_packages

setup(
    name="geneset_graph",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "scipy",
        "scikit-learn",
        "pandas",
        "matplotlib",
        "numba"
    ],
    extras_require={
        "test": ["pytest"],
    },
    description="Similarity networks, communities and theme labels for enriched gene sets",
    python_requires=">=3.8",
)
