"""
Recipe browsing UI for RECOOK BOOK.

Provides the home page (featured recipes), the recipe listing with search,
category and sort filters, and recipe cards with upvote and delete actions.
"""

import streamlit as st
from typing import List

from models import Recipe, SortMode, RECIPE_CATEGORIES
from services import SiteController, ALL_RECIPES_VIEW, FEATURED_VIEW
from .renderer import StreamlitRenderer


class RecipeBrowser:
    """
    Recipe browsing interface.

    Cards are drawn from the views the controller rendered; every button
    goes back through the controller and then reruns the page.
    """

    SORT_LABELS = {
        SortMode.NEWEST: "Newest first",
        SortMode.POPULAR: "Most popular",
        SortMode.ALPHABETICAL: "A to Z"
    }

    def __init__(self, controller: SiteController, renderer: StreamlitRenderer):
        self.controller = controller
        self.renderer = renderer

        # Session state keys
        self.SEARCH_KEY = "recipe_search_query"
        self.CATEGORY_KEY = "recipe_category_filter"
        self.SORT_KEY = "recipe_sort_mode"

    def render_home_page(self):
        st.title("🍽️ RECOOK BOOK")
        st.markdown("*Give your leftovers a second life*")

        st.header("⭐ Featured Recipes")
        featured = self.renderer.recipes(FEATURED_VIEW)
        if not featured:
            st.info("No recipes yet. Be the first to share one!")
        for recipe in featured:
            self._render_recipe_card(recipe, view=FEATURED_VIEW)

    def render_recipes_page(self):
        st.title("📚 All Recipes")

        col1, col2, col3 = st.columns([2, 1, 1])
        with col1:
            search_term = st.text_input(
                "🔍 Search recipes",
                placeholder="Search by title or ingredient...",
                key=self.SEARCH_KEY
            )
        with col2:
            category = st.selectbox(
                "Category",
                [""] + RECIPE_CATEGORIES,
                format_func=lambda c: c.title() if c else "All categories",
                key=self.CATEGORY_KEY
            )
        with col3:
            sort_mode = st.selectbox(
                "Sort by",
                list(SortMode),
                format_func=lambda mode: self.SORT_LABELS[mode],
                key=self.SORT_KEY
            )

        recipes = self.controller.request_filter(search_term, category, sort_mode)
        st.caption(f"Showing {len(recipes)} recipe{'s' if len(recipes) != 1 else ''}")

        if not recipes:
            st.info("No recipes match your search. Try different keywords or filters.")
            return

        for recipe in self.renderer.recipes(ALL_RECIPES_VIEW):
            self._render_recipe_card(recipe, view=ALL_RECIPES_VIEW)

    def _render_recipe_card(self, recipe: Recipe, view: str):
        upvoted = recipe.id in self.renderer.upvoted_ids

        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.subheader(recipe.title)
                st.caption(
                    f"⏱️ {recipe.prep_time} min · 🏷️ {recipe.category} · "
                    f"📅 {recipe.date_added.strftime('%b %d, %Y')} · 👤 by {recipe.author}"
                )
            with col2:
                heart = "❤️" if upvoted else "🤍"
                if st.button(f"{heart} {recipe.upvotes}", key=f"upvote_{view}_{recipe.id}"):
                    self.controller.request_toggle_upvote(recipe.id)
                    st.rerun()

            leftovers = recipe.get_leftover_list()
            preview = ", ".join(leftovers[:2]) + ("..." if len(leftovers) > 2 else "")
            st.markdown(f"♻️ **Uses leftovers:** {preview}")

            with st.expander("View Recipe"):
                self._render_recipe_details(recipe)

            self._render_delete_controls(recipe, view)

    def _render_recipe_details(self, recipe: Recipe):
        st.markdown("**♻️ Leftover Ingredients**")
        st.markdown(self._bullets(recipe.get_leftover_list()))

        additional = recipe.get_additional_list()
        if additional:
            st.markdown("**🛒 Additional Ingredients**")
            st.markdown(self._bullets(additional))

        st.markdown("**📋 Instructions**")
        for step in recipe.get_instruction_steps():
            st.markdown(step)

        if recipe.tips:
            st.markdown("**💡 Tips**")
            st.markdown(recipe.tips)

    def _render_delete_controls(self, recipe: Recipe, view: str):
        confirm_key = f"confirm_delete_{view}_{recipe.id}"

        if not st.session_state.get(confirm_key, False):
            if st.button("🗑️ Delete", key=f"delete_{view}_{recipe.id}"):
                st.session_state[confirm_key] = True
                st.rerun()
            return

        st.warning("Are you sure you want to delete this recipe? This action cannot be undone.")
        col1, col2 = st.columns([1, 1])
        with col1:
            if st.button("Yes, Delete", key=f"confirm_delete_yes_{view}_{recipe.id}", type="primary"):
                st.session_state.pop(confirm_key, None)
                self.controller.request_delete(recipe.id)
                st.rerun()
        with col2:
            if st.button("Cancel", key=f"cancel_delete_{view}_{recipe.id}"):
                st.session_state.pop(confirm_key, None)
                st.rerun()

    @staticmethod
    def _bullets(items: List[str]) -> str:
        return "\n".join(f"- {item}" for item in items)
