from setuptools import setup, find_packages

setup(
    name="workout_analysis",
    version="1.0.0",
    packages=find_packages(include=["workout_analysis", "workout_analysis.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "numpy>=1.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "workout-analysis=workout_analysis.cli:main",
        ],
    },
    python_requires=">=3.8",
)
