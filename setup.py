from setuptools import setup, find_packages

setup(
    name="hvacsim",
    version="0.1.0",
    description="Annual HVAC energy cost comparison against historical weather",
    packages=find_packages(include=["hvacsim", "hvacsim.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
