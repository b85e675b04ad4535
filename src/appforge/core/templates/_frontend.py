"""State, auth and data-service files shared by web and mobile projects."""

from __future__ import annotations

from appforge.core.config import ProjectConfig
from appforge.core.types import ApiType, ProjectType


def _api_url(config: ProjectConfig) -> str:
    base = "/api/v1" if config.uses_backend and config.backend.api_versioning else "/api"
    if config.type == ProjectType.WEB:
        return f"import.meta.env.VITE_API_URL ?? '{base}'"
    return f"'http://localhost:3000{base}'"


def redux_store(config: ProjectConfig) -> str:
    if config.features.authentication:
        imports = "import { configureStore } from '@reduxjs/toolkit';\n" + (
            "import authReducer from '../features/auth/authSlice';\n"
        )
        reducers = "    auth: authReducer,\n"
    else:
        imports = "import { configureStore } from '@reduxjs/toolkit';\n"
        reducers = ""
    return f"""\
{imports}
export const store = configureStore({{
  reducer: {{
{reducers}  }},
}});

export type RootState = ReturnType<typeof store.getState>;
export type AppDispatch = typeof store.dispatch;
"""


def app_context(config: ProjectConfig) -> str:
    return """\
import { createContext, ReactNode, useContext, useState } from 'react';

interface AppState {
  loading: boolean;
  setLoading: (loading: boolean) => void;
}

const AppContext = createContext<AppState | undefined>(undefined);

export function AppProvider({ children }: { children: ReactNode }) {
  const [loading, setLoading] = useState(false);
  return <AppContext.Provider value={{ loading, setLoading }}>{children}</AppContext.Provider>;
}

export function useApp(): AppState {
  const ctx = useContext(AppContext);
  if (!ctx) {
    throw new Error('useApp must be used inside AppProvider');
  }
  return ctx;
}
"""


def auth_slice(config: ProjectConfig) -> str:
    return """\
import { createSlice, PayloadAction } from '@reduxjs/toolkit';
import type { User } from './services/authService';

interface AuthState {
  user: User | null;
}

const initialState: AuthState = { user: null };

const authSlice = createSlice({
  name: 'auth',
  initialState,
  reducers: {
    loginSucceeded(state, action: PayloadAction<User>) {
      state.user = action.payload;
    },
    loggedOut(state) {
      state.user = null;
    },
  },
});

export const { loginSucceeded, loggedOut } = authSlice.actions;
export default authSlice.reducer;
"""


def auth_context(config: ProjectConfig) -> str:
    return """\
import { createContext, ReactNode, useContext, useState } from 'react';
import type { User } from './services/authService';

interface AuthContextValue {
  user: User | null;
  setUser: (user: User | null) => void;
}

const AuthContext = createContext<AuthContextValue | undefined>(undefined);

export function AuthProvider({ children }: { children: ReactNode }) {
  const [user, setUser] = useState<User | null>(null);
  return <AuthContext.Provider value={{ user, setUser }}>{children}</AuthContext.Provider>;
}

export function useAuth(): AuthContextValue {
  const ctx = useContext(AuthContext);
  if (!ctx) {
    throw new Error('useAuth must be used inside AuthProvider');
  }
  return ctx;
}
"""


def auth_service(config: ProjectConfig) -> str:
    web = config.type == ProjectType.WEB
    storage = (
        "localStorage.setItem('token', data.token);\n"
        "  localStorage.setItem('user', JSON.stringify(data.user));"
        if web
        else "currentUser = data.user;"
    )
    current = (
        "const raw = localStorage.getItem('user');\n  return raw ? (JSON.parse(raw) as User) : null;"
        if web
        else "return currentUser;"
    )
    module_state = "" if web else "let currentUser: User | null = null;\n\n"
    return f"""\
import axios from 'axios';

export interface User {{
  id: string;
  email: string;
  roles: string[];
}}

interface LoginResponse {{
  token: string;
  user: User;
}}

const API_URL = {_api_url(config)};

{module_state}export async function login(email: string, password: string): Promise<User> {{
  const {{ data }} = await axios.post<LoginResponse>(`${{API_URL}}/auth/login`, {{ email, password }});
  {storage}
  return data.user;
}}

export function getCurrentUser(): User | null {{
  {current}
}}
"""


def data_service(config: ProjectConfig) -> str:
    if config.api_type == ApiType.GRAPHQL and config.type == ProjectType.WEB:
        return """\
import { gql } from '@apollo/client';
import { graphqlClient } from '../../../lib/graphqlClient';

export interface Item {
  id: string;
  name: string;
}

const LIST_ITEMS = gql`
  query ListItems {
    items {
      id
      name
    }
  }
`;

export async function listItems(): Promise<Item[]> {
  const { data } = await graphqlClient.query<{ items: Item[] }>({ query: LIST_ITEMS });
  return data.items;
}
"""
    if config.type == ProjectType.WEB:
        return """\
import { apiClient } from '../../../lib/apiClient';

export interface Item {
  id: string;
  name: string;
}

export const listItems = async (): Promise<Item[]> => (await apiClient.get('/items')).data;

export const getItem = async (id: string): Promise<Item> =>
  (await apiClient.get(`/items/${id}`)).data;

export const createItem = async (item: Omit<Item, 'id'>): Promise<Item> =>
  (await apiClient.post('/items', item)).data;

export const updateItem = async (id: string, item: Partial<Item>): Promise<Item> =>
  (await apiClient.put(`/items/${id}`, item)).data;

export const deleteItem = async (id: string): Promise<void> => {
  await apiClient.delete(`/items/${id}`);
};
"""
    return f"""\
export interface Item {{
  id: string;
  name: string;
}}

const API_URL = {_api_url(config)};

async function request<T>(path: string, init?: RequestInit): Promise<T> {{
  const response = await fetch(`${{API_URL}}${{path}}`, {{
    headers: {{ 'Content-Type': 'application/json' }},
    ...init,
  }});
  if (!response.ok) {{
    throw new Error(`Request failed with status ${{response.status}}`);
  }}
  return response.json() as Promise<T>;
}}

export const listItems = () => request<Item[]>('/items');

export const createItem = (item: Omit<Item, 'id'>) =>
  request<Item>('/items', {{ method: 'POST', body: JSON.stringify(item) }});

export const deleteItem = (id: string) => request<void>(`/items/${{id}}`, {{ method: 'DELETE' }});
"""
