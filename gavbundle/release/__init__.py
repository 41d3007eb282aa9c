# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Bundling subsystem for gavbundle.

Signing, checksumming, archive writing, per-project deployment and the
batch packager that ties them into one all-or-nothing bundle. Descriptor
parsing and artifact discovery live beside it in `gavbundle.descriptor`
and `gavbundle.artifacts`; the upload client lives in `gavbundle.publishing`.
"""
