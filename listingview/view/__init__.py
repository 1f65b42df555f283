"""Listing view engine: filtering, sorting, statistics and paging."""

from listingview.view.controller import BuildingView
from listingview.view.filtering import apply_filters, normalize_filters
from listingview.view.sorting import apply_sort, next_sort
from listingview.view.aggregation import compute_stats, summarize
from listingview.view.pagination import paginate
