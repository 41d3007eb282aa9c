# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
gavbundle: build signed, checksummed release bundles for Maven-style
artifacts and hand them to a publishing portal as one deployment.
"""

__version__ = "0.1.0"
