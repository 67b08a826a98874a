import enum

class CounterSortField(enum.StrEnum):
    START_DATE = "startDate"
    CREATED_AT = "createdAt"
    NAME = "name"
    POPULARITY = "popularity"

class SortOrder(enum.StrEnum):
    ASC = "asc"
    DESC = "desc"
