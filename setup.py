# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="sonar-runner",
    version="2.0.0",
    description="Launcher that builds the project definition of a code analysis and hands it to the analysis engine",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["sonar_runner*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'sonar-runner=sonar_runner.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
