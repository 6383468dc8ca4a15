from setuptools import setup, find_packages

setup(
    name="mzsdrf",
    version="0.1.0",
    description="Annotate streamed mzML files with SDRF sample metadata",
    packages=find_packages(include=["mzsdrf", "mzsdrf.*"]),
    python_requires=">=3.8",
    install_requires=[
        "lxml>=4.5",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "mzsdrf=mzsdrf.__main__:main",
        ],
    },
)
