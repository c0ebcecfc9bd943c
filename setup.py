# Copyright 2024 sheet-relay authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import io
import os

from setuptools import find_packages
from setuptools import setup


DEPENDENCIES = (
    "cryptography >= 38.0.3",
    "requests >= 2.20.0, < 3.0.0",
    "flask >= 2.2.0",
)

extras = {
    "testing": ["pytest", "pytest-cov", "mock", "freezegun"],
}

package_root = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(package_root, "sheet_relay/version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

with io.open(os.path.join(package_root, "README.rst"), encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="sheet-relay",
    version=version,
    description="Append rows to a Google Sheet over HTTP using a service account",
    long_description=long_description,
    license="Apache 2.0",
    packages=find_packages(exclude=("tests*", "system_tests*", "docs*")),
    install_requires=DEPENDENCIES,
    extras_require=extras,
    python_requires=">=3.8",
    entry_points={"console_scripts": ["sheet-relay=sheet_relay.server:main"]},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
    ],
)
