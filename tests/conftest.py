import pytest

from binder.models import AccessMode, ObjectReference, PersistentVolume, PersistentVolumeClaim
from binder.ordered_index import PersistentVolumeOrderedIndex

RWO = AccessMode.READ_WRITE_ONCE
ROX = AccessMode.READ_ONLY_MANY
RWX = AccessMode.READ_WRITE_MANY


@pytest.fixture()
def make_volume():
    def _make(name, size, modes=(RWO,), bound_to=None, namespace=""):
        claim_ref = None
        if bound_to:
            claim_ref = ObjectReference(namespace="default", name=bound_to)
        return PersistentVolume(
            name=name,
            namespace=namespace,
            access_modes=list(modes),
            capacity={"storage": size},
            claim_ref=claim_ref,
        )
    return _make


@pytest.fixture()
def make_claim():
    def _make(size, modes=(RWO,), name="claim01", namespace="default"):
        return PersistentVolumeClaim(
            name=name,
            namespace=namespace,
            access_modes=list(modes),
            requests={"storage": size},
        )
    return _make


@pytest.fixture()
def index():
    return PersistentVolumeOrderedIndex()


@pytest.fixture()
def gce_index(index, make_volume):
    """Mixed catalogue of volumes across several access-mode signatures."""
    volumes = [
        make_volume("gce-pd-1", "1G", (RWO, ROX)),
        make_volume("gce-pd-5", "5G", (RWO, ROX)),
        make_volume("gce-pd-10", "10G", (RWO, ROX)),
        make_volume("nfs-1", "1G", (RWO, ROX, RWX)),
        make_volume("nfs-5", "5G", (RWO, ROX, RWX)),
        make_volume("nfs-10", "10G", (RWO, ROX, RWX)),
        make_volume("ebs-1", "1Gi", (RWO,)),
        make_volume("ebs-5", "5Gi", (RWO,)),
        make_volume("ebs-10", "10Gi", (RWO,)),
    ]
    for volume in volumes:
        index.add(volume)
    return index
