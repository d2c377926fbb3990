def get_violations_query(base_url: str,
                         dataset_id: str,
                         plate: str,
                         state: str,
                         plate_field: str = 'plate',
                         state_field: str = 'state',
                         order_field: str = 'issue_date',
                         limit: int = 1000,
                         offset: int = 0) -> str:
    """Build a SoQL url selecting one plate's rows, newest first."""

    where_clause = (
        f"$where=upper({plate_field})='{_escape(plate)}' "
        f"AND upper({state_field})='{_escape(state)}'")

    query = (
        f"{base_url}/{dataset_id}.json?{where_clause}"
        f"&$limit={limit}"
        f"&$order={order_field} DESC")

    if offset > 0:
        query += f"&$offset={offset}"

    return query


def _escape(value: str) -> str:
    return value.replace("'", "''")
