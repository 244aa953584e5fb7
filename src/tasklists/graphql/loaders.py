from strawberry.dataloader import DataLoader

from ..database import DataStore, UserRecord


def make_user_loader(store: DataStore) -> DataLoader[str, UserRecord | None]:
    async def load_users(keys: list[str]) -> list[UserRecord | None]:
        """Batch load users by ID, returning them in key order."""
        ids = [store.parse_id(key) for key in keys]
        users = await store.users.find_many({"_id": {"$in": ids}})
        users_map = {user.id: user for user in users}
        return [users_map.get(key) for key in keys]

    return DataLoader(load_fn=load_users)


class Loaders:
    def __init__(self, store: DataStore):
        self.user_loader = make_user_loader(store)
