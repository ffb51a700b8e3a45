# utils/mongo_index.py
from pymongo.errors import OperationFailure


async def ensure_index(coll, keys, name: str, *, drop_if_mismatch: bool = False) -> bool:
    """
    Create the named index if it is missing. An index with that name but other
    keys is left alone unless `drop_if_mismatch` (ALLOW_INDEX_DROP) is set, in
    which case it is dropped and rebuilt. Returns True when an index was created.
    """
    info = await coll.index_information()
    if name in info:
        if [tuple(k) for k in info[name]["key"]] == [tuple(k) for k in keys]:
            return False
        if not drop_if_mismatch:
            return False
        try:
            await coll.drop_index(name)
        except OperationFailure:
            pass  # dropped concurrently

    await coll.create_index(keys, name=name)
    return True
