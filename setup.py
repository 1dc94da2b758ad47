"""
Setup file for AWS EC2 Instance Inspector.
Allows installation in development mode: pip install -e .
"""
from setuptools import setup, find_packages

setup(
    name="aws-ec2-inspector",
    version="1.0.0",
    description="Inspectable EC2 instance resource for compliance checks",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["lambda_handler"],
    python_requires=">=3.9",
    install_requires=[
        "boto3",
        "botocore",
        "jinja2",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "pytest-mock",
        ],
    },
)
