# setup.py
from setuptools import setup, find_packages

setup(
    name="ngram-freq",
    version="0.3.0",
    description="Letter and word n-gram frequency tables over text files and zip archives",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "tqdm>=4.60",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "ngrams=ngramfreq.cli:main",
        ],
    },
)
