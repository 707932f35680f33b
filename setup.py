#!/usr/bin/env python3

from pathlib import Path

from setuptools import find_namespace_packages, setup

packages = find_namespace_packages(include=("dap_cmp*",))
package_data = {pkg: ("py.typed", "*.lua", "*.yml") for pkg in packages}
install_requires = Path("requirements.txt").read_text().splitlines()

setup(
    name="dap_cmp",
    python_requires=">=3.8.2",
    version="0.1.0",
    description="nvim-cmp completion source for nvim-dap consoles",
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=packages,
    package_data=package_data,
    install_requires=install_requires,
)
