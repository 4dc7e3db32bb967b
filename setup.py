"""
Setup configuration for the PWR educational simulator library.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pwr-simulator",
    version="1.0.0",
    author="Nuclear Sim Team",
    description="Stylized PWR plant model for interactive educational displays",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pwr_simulator", "pwr_simulator.*"]),
    py_modules=["pwr_sim"],
    package_data={"pwr_simulator": ["config/*.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
        "pandas>=1.1.0",
        "PyYAML>=5.3",
        "rich>=10.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=2.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "pwr-sim=pwr_sim:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
