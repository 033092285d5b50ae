import importlib.util
import os
from setuptools import setup, find_packages


def load_version():
    spec = importlib.util.spec_from_file_location(
        "v2_dataplane.version",
        os.path.join(os.path.dirname(__file__), "v2_dataplane", "version.py"),
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.__version__


__version__ = load_version()


def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()


setup(
    name="v2-dataplane",
    version=__version__,
    python_requires=">=3.9",
    install_requires=[
        "pyhumps==1.6.1",
        "protobuf>=4.25",
    ],
    extras_require={
        "dev": ["pytest", "pytest-mock", "flake8", "black", "typeguard>=4"],
    },
    author="Hopsworks AB",
    description="InferParameter value type for the KServe v2 inference dataplane protocol",
    license="Apache License 2.0",
    keywords="Hopsworks, KServe, Inference, Model Serving, MLOps",
    url="https://github.com/logicalclocks/hopsworks-api",
    packages=find_packages(exclude=["tests", "tests.*"]),
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Topic :: Utilities",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Intended Audience :: Developers",
    ],
)
