"""Bulletin board web application backed by Redis."""
