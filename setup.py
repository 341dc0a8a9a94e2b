from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pynoisey",
    version="0.1.0",
    description="Coherent noise generation and composition (Perlin, OpenSimplex, fBm, select, scale)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pynoisey", "pynoisey.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "matplotlib>=3.5.0",
        "click>=7.0",
        "pillow>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    keywords="noise perlin opensimplex fbm procedural heightmap texture",
    entry_points={
        "console_scripts": [
            "pnz-render=pynoisey.cli.render_commands:render",
        ],
    },
)
