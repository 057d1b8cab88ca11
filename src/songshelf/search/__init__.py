from songshelf.search.itunes import ItunesSearchClient, search_songs

__all__ = ["ItunesSearchClient", "search_songs"]
