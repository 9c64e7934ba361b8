from setuptools import setup, find_packages

setup(
    name="seam_rpc",
    version="0.1.0",
    description="JSON-RPC 2.0 client over HTTP and newline-delimited TCP",
    author="Seam RPC Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.24.0",
        "opentelemetry-api>=1.14.0",
        "opentelemetry-sdk>=1.14.0",
        "opentelemetry-exporter-otlp>=1.14.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    entry_points={
        "console_scripts": [
            "seam-rpc=seam_rpc.cli:main",
        ],
    },
    python_requires=">=3.9",
)
