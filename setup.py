#
# sonar-resources
# Copyright (C) 2025 Olivier Korach
# mailto:olivier.korach AT gmail DOT com
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 3 of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program; if not, write to the Free Software Foundation,
# Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#
import setuptools
from sonar_resources import version


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()
setuptools.setup(
    name="sonar-resources",
    version=version.PACKAGE_VERSION,
    author="Olivier Korach",
    author_email="olivier.korach@gmail.com",
    description="Declarative management of SonarQube portfolio hierarchies and Azure DevOps ALM settings",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/okorach/sonar-resources",
    project_urls={
        "Bug Tracker": "https://github.com/okorach/sonar-resources/issues",
        "Source Code": "https://github.com/okorach/sonar-resources",
    },
    packages=setuptools.find_packages(include=["sonar_resources", "sonar_resources.*", "cli"]),
    package_data={"sonar_resources": ["util/sonar-resources.properties"]},
    install_requires=[
        "requests",
        "jprops",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "sonar-portfolio-hierarchy = cli.hierarchy_cli:main",
            "sonar-alm-azure = cli.alm_cli:main",
        ]
    },
    python_requires=">=3.9",
)
