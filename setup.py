# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="calcy",
    version="0.1.0",
    description="A small Lisp evaluator for exploring call-by-value, call-by-name and call-by-need",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["calcy", "calcy.*"]),
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["calcy=calcy.__main__:main"],
    },
    zip_safe=False,
)
